from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Session role allowed into the performance routes."""

    ADMIN = "admin"


class AttendanceStatus(str, Enum):
    """Daily attendance codes as stored by the attendance-marking subsystem."""

    PRESENT = "P"
    ABSENT = "A"
    LEAVE = "L"
    LATE = "T"
    SHORT_LEAVE = "S"


class CheckingQuality(str, Enum):
    """How well a returned paper was marked."""

    GOOD = "Good"
    BETTER = "Better"
    BAD = "Bad"


class PunctualityMode(str, Enum):
    FIXED = "fixed"
    FLEXIBILITY = "flexibility"


class RecalculationState(str, Enum):
    IDLE = "IDLE"
    PREVIEWING = "PREVIEWING"
    PREVIEWED = "PREVIEWED"
    COMMITTING = "COMMITTING"
    COMMITTED = "COMMITTED"
    FAILED = "FAILED"
