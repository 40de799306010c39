from __future__ import annotations

from datetime import timedelta

from ...core.constants import DEFAULT_FLEXIBILITY_EXTRA_MINUTES
from ...teachers.model import Teacher
from .base import PunctualityRule


class FlexibilityRule(PunctualityRule):
    """Teacher's own late flexibility plus a fixed margin."""

    def __init__(self, extra_minutes: int = DEFAULT_FLEXIBILITY_EXTRA_MINUTES):
        self._extra_minutes = int(extra_minutes)

    def tolerance(self, teacher: Teacher) -> timedelta:
        return timedelta(minutes=max(teacher.late_flexibility_minutes, 0) + self._extra_minutes)
