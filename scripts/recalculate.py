"""Preview (and optionally commit) teacher performance for one month.

    python scripts/recalculate.py --month 3 --year 2024 [--campus 2] [--commit]
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
import threading
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src" / "teacher_performance"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from dotenv import load_dotenv

from config import get_settings_module

from teacher_performance.container import build_container
from teacher_performance.core.exceptions import DomainError
from teacher_performance.performance.ranking import RankingReporter


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--month", type=int, required=True)
    parser.add_argument("--year", type=int, required=True)
    parser.add_argument("--campus", type=int, default=None, help="campus id; omit for all campuses")
    parser.add_argument("--commit", action="store_true", help="replace stored results for the scope")
    parser.add_argument("--by", default="System", help="name stamped as created_by")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = _parse_args(argv)
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(db_config=dict(settings.DB_CONFIG), scoring=getattr(settings, "SCORING", None))
    service = container.recalculation_service
    cancel = threading.Event()

    try:
        run = service.preview(args.campus, args.month, args.year, cancel_event=cancel)
        for position, r in enumerate(RankingReporter(run.results).ordered(), start=1):
            print(f"{position:>3}. {r.teacher_name:<30} {r.total_score:6.2f}")
        if args.commit:
            run = service.commit_run(run, cancel_event=cancel, created_by=args.by)
    except KeyboardInterrupt:
        cancel.set()
        print("Cancelled")
        return 130
    except DomainError as e:
        print(f"ERROR: {e}")
        return 1

    print(f"OK: {run.state.value} {run.scope} ({len(run.results)} teachers)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
