from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import TestReturnEntry


class TestReturnRepository(Protocol):
    def get_test_returns(self, teacher_id: int, period_start: date, period_end: date) -> Sequence[TestReturnEntry]:
        raise NotImplementedError

    def list_returns(self, *, campus_id: Optional[int], period_start: date, period_end: date) -> Sequence[TestReturnEntry]:
        """All active return logs with an exam date in the period (joined with names)."""

        raise NotImplementedError
