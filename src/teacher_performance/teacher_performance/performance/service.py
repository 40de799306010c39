from __future__ import annotations

import logging
import threading
from collections import Counter
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Iterable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_CREATED_BY, DEFAULT_MAX_WORKERS
from ..core.enums import RecalculationState
from ..core.exceptions import (
    CommitConflictError,
    InvalidStateTransition,
    PersistenceError,
    RecalculationCancelled,
    RecalculationError,
    ValidationError,
)
from ..holidays.model import WorkingCalendar
from ..holidays.resolver import WorkingCalendarResolver
from ..teachers.model import Teacher
from ..teachers.repository import TeacherRepository
from .locks import ScopeLockRegistry
from .model import PerformanceResult, RecalculationScope
from .repository import PerformanceRepository
from .scorer import TeacherScorer

logger = logging.getLogger(__name__)

_TRANSITIONS = {
    RecalculationState.IDLE: {RecalculationState.PREVIEWING},
    RecalculationState.PREVIEWING: {RecalculationState.PREVIEWED, RecalculationState.FAILED},
    RecalculationState.PREVIEWED: {RecalculationState.COMMITTING},
    RecalculationState.COMMITTING: {RecalculationState.COMMITTED, RecalculationState.FAILED},
    RecalculationState.COMMITTED: set(),
    RecalculationState.FAILED: set(),
}


@dataclass
class RecalculationRun:
    """One preview/commit pass over a scope."""

    scope: RecalculationScope
    state: RecalculationState = RecalculationState.IDLE
    results: tuple[PerformanceResult, ...] = ()
    error: Optional[BaseException] = None
    committed_at: Optional[datetime] = None
    history: list[RecalculationState] = field(default_factory=list)

    def move_to(self, state: RecalculationState) -> None:
        if state not in _TRANSITIONS[self.state]:
            raise InvalidStateTransition(f"Cannot go from {self.state.value} to {state.value}", run=self)
        self.history.append(self.state)
        self.state = state

    def fail(self, error: BaseException) -> None:
        self.error = error
        self.move_to(RecalculationState.FAILED)


def _check_cancelled(cancel_event: Optional[threading.Event], scope: RecalculationScope) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise RecalculationCancelled(f"Recalculation of {scope} was cancelled")


class RecalculationOrchestrator:
    """Preview then commit monthly scores for every active teacher of a scope.

    Preview only reads. Commit replaces the stored scope in one transaction
    and is exclusive per overlapping scope; a busy scope raises
    CommitConflictError instead of waiting. Any source read error aborts the
    whole scope; the first failing teacher by id is reported.
    """

    def __init__(
        self,
        teachers: TeacherRepository,
        calendar: WorkingCalendarResolver,
        scorer: TeacherScorer,
        performances: PerformanceRepository,
        *,
        max_workers: int = DEFAULT_MAX_WORKERS,
        locks: Optional[ScopeLockRegistry] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._teachers = teachers
        self._calendar = calendar
        self._scorer = scorer
        self._performances = performances
        self._max_workers = max(int(max_workers), 1)
        self._locks = locks or ScopeLockRegistry()
        self._clock = clock

    # -------- Preview --------
    def preview(
        self,
        campus_id: Optional[int],
        month: int,
        year: int,
        *,
        cancel_event: Optional[threading.Event] = None,
    ) -> RecalculationRun:
        run = RecalculationRun(scope=RecalculationScope.of(campus_id, month, year))
        run.move_to(RecalculationState.PREVIEWING)
        try:
            run.results = tuple(self._score_scope(run.scope, cancel_event))
        except RecalculationError as e:
            run.fail(e)
            e.run = run
            logger.warning("preview of %s stopped: %s", run.scope, e)
            raise
        except Exception as e:
            run.fail(e)
            logger.error("preview of %s failed", run.scope, exc_info=True)
            raise RecalculationError(f"Could not read source data for {run.scope}: {e}", run=run) from e

        run.move_to(RecalculationState.PREVIEWED)
        logger.info("previewed %s: %d teachers", run.scope, len(run.results))
        return run

    def _score_scope(
        self,
        scope: RecalculationScope,
        cancel_event: Optional[threading.Event],
    ) -> list[PerformanceResult]:
        _check_cancelled(cancel_event, scope)
        teachers = sorted(self._teachers.get_active_teachers(scope.campus_id), key=lambda t: t.teacher_id)

        calendars: dict[int, WorkingCalendar] = {}
        for campus_id in sorted({t.campus_id for t in teachers}):
            calendars[campus_id] = self._calendar.resolve(campus_id, scope.month, scope.year)

        def score_one(teacher: Teacher) -> PerformanceResult:
            _check_cancelled(cancel_event, scope)
            return self._scorer.score(teacher, calendars[teacher.campus_id])

        if self._max_workers == 1 or len(teachers) <= 1:
            return [score_one(t) for t in teachers]

        with ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="score") as pool:
            futures: list[Future] = [pool.submit(score_one, t) for t in teachers]
            try:
                # Collected in teacher order so the reported failure is always the same one.
                return [f.result() for f in futures]
            except BaseException:
                for f in futures:
                    f.cancel()
                raise

    # -------- Commit --------
    def commit(
        self,
        campus_id: Optional[int],
        month: int,
        year: int,
        results: Iterable[PerformanceResult],
        *,
        cancel_event: Optional[threading.Event] = None,
        created_by: Optional[str] = None,
    ) -> RecalculationRun:
        scope = RecalculationScope.of(campus_id, month, year)
        results = tuple(results)
        outside = [r.teacher_id for r in results if not scope.contains(r)]
        if outside:
            raise ValidationError(f"Results for teachers {outside} do not belong to {scope}")
        counts = Counter(r.teacher_id for r in results)
        duplicates = sorted(teacher_id for teacher_id, n in counts.items() if n > 1)
        if duplicates:
            raise ValidationError(f"Duplicate results for teachers {duplicates}")

        run = RecalculationRun(scope=scope, results=results)
        run.move_to(RecalculationState.PREVIEWING)
        run.move_to(RecalculationState.PREVIEWED)
        return self.commit_run(run, cancel_event=cancel_event, created_by=created_by)

    def commit_run(
        self,
        run: RecalculationRun,
        *,
        cancel_event: Optional[threading.Event] = None,
        created_by: Optional[str] = None,
    ) -> RecalculationRun:
        if run.state != RecalculationState.PREVIEWED:
            raise InvalidStateTransition(f"Only a previewed run can be committed (state={run.state.value})", run=run)

        # Last point where cancelling is honoured.
        _check_cancelled(cancel_event, run.scope)

        try:
            self._locks.acquire(run.scope)
        except CommitConflictError as e:
            # Nothing started; the run stays PREVIEWED and may be committed again.
            e.run = run
            logger.warning("commit of %s refused: scope busy", run.scope)
            raise

        try:
            run.move_to(RecalculationState.COMMITTING)
            committed_at = self._clock()
            self._performances.replace_scope(
                run.scope,
                run.results,
                created_by=created_by or DEFAULT_CREATED_BY,
                created_at=committed_at,
            )
        except CommitConflictError as e:
            run.fail(e)
            e.run = run
            logger.warning("commit of %s conflicted with another writer", run.scope)
            raise
        except Exception as e:
            run.fail(e)
            logger.warning("commit of %s rolled back: %s", run.scope, e)
            raise PersistenceError(f"Saving results for {run.scope} failed; previous results kept", run=run) from e
        finally:
            self._locks.release(run.scope)

        run.committed_at = committed_at
        run.move_to(RecalculationState.COMMITTED)
        logger.info("committed %s: %d results", run.scope, len(run.results))
        return run

    def recalculate(
        self,
        campus_id: Optional[int],
        month: int,
        year: int,
        *,
        cancel_event: Optional[threading.Event] = None,
        created_by: Optional[str] = None,
    ) -> RecalculationRun:
        run = self.preview(campus_id, month, year, cancel_event=cancel_event)
        return self.commit_run(run, cancel_event=cancel_event, created_by=created_by)

    # -------- Reads --------
    def stored_results(self, campus_id: Optional[int], month: int, year: int) -> Sequence[PerformanceResult]:
        return self._performances.list_scope(RecalculationScope.of(campus_id, month, year))

    def stored_result(self, performance_id: int) -> Optional[PerformanceResult]:
        return self._performances.get_by_id(performance_id)
