from __future__ import annotations

from datetime import timedelta

from ..core.constants import DEFAULT_RETURN_FLEXIBILITY_DAYS
from .model import TestReturnEntry


def is_returned_on_time(entry: TestReturnEntry, flexibility_days: int = DEFAULT_RETURN_FLEXIBILITY_DAYS) -> bool:
    """A paper with no return date is never on time."""
    if entry.return_date is None:
        return False
    return (entry.return_date - entry.exam_date).days <= flexibility_days


def days_late(entry: TestReturnEntry, flexibility_days: int = DEFAULT_RETURN_FLEXIBILITY_DAYS) -> int:
    if entry.return_date is None or is_returned_on_time(entry, flexibility_days):
        return 0
    due = entry.exam_date + timedelta(days=flexibility_days)
    return max(0, (entry.return_date - due).days)
