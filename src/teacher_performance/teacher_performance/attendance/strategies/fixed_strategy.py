from __future__ import annotations

from datetime import timedelta

from ...core.constants import DEFAULT_ON_TIME_GRACE_MINUTES
from ...teachers.model import Teacher
from .base import PunctualityRule


class FixedGraceRule(PunctualityRule):
    """Same grace window for every teacher."""

    def __init__(self, grace_minutes: int = DEFAULT_ON_TIME_GRACE_MINUTES):
        self._grace = timedelta(minutes=int(grace_minutes))

    def tolerance(self, teacher: Teacher) -> timedelta:
        return self._grace
