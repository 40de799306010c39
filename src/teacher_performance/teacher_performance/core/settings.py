from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..common.validators import require_non_negative
from .constants import (
    DEFAULT_FLEXIBILITY_EXTRA_MINUTES,
    DEFAULT_MAX_WORKERS,
    DEFAULT_ON_TIME_GRACE_MINUTES,
    DEFAULT_RETURN_FLEXIBILITY_DAYS,
    DEFAULT_TOP_N,
)
from .enums import PunctualityMode
from .exceptions import ValidationError


@dataclass(frozen=True)
class ScoringSettings:
    """Tunables read from the settings module's SCORING dict."""

    punctuality_mode: PunctualityMode = PunctualityMode.FIXED
    on_time_grace_minutes: int = DEFAULT_ON_TIME_GRACE_MINUTES
    flexibility_extra_minutes: int = DEFAULT_FLEXIBILITY_EXTRA_MINUTES
    return_flexibility_days: int = DEFAULT_RETURN_FLEXIBILITY_DAYS
    max_workers: int = DEFAULT_MAX_WORKERS
    top_n: int = DEFAULT_TOP_N

    @classmethod
    def from_mapping(cls, values: Optional[Mapping[str, Any]]) -> "ScoringSettings":
        values = dict(values or {})
        mode = str(values.get("PUNCTUALITY_MODE", PunctualityMode.FIXED.value)).strip().lower()
        try:
            punctuality_mode = PunctualityMode(mode)
        except ValueError:
            raise ValidationError(f"Unknown PUNCTUALITY_MODE: {mode!r}")

        max_workers = require_non_negative(values.get("MAX_WORKERS", DEFAULT_MAX_WORKERS), "MAX_WORKERS")
        return cls(
            punctuality_mode=punctuality_mode,
            on_time_grace_minutes=require_non_negative(
                values.get("ON_TIME_GRACE_MINUTES", DEFAULT_ON_TIME_GRACE_MINUTES), "ON_TIME_GRACE_MINUTES"
            ),
            flexibility_extra_minutes=require_non_negative(
                values.get("FLEXIBILITY_EXTRA_MINUTES", DEFAULT_FLEXIBILITY_EXTRA_MINUTES), "FLEXIBILITY_EXTRA_MINUTES"
            ),
            return_flexibility_days=require_non_negative(
                values.get("RETURN_FLEXIBILITY_DAYS", DEFAULT_RETURN_FLEXIBILITY_DAYS), "RETURN_FLEXIBILITY_DAYS"
            ),
            max_workers=max(max_workers, 1),
            top_n=require_non_negative(values.get("TOP_N", DEFAULT_TOP_N), "TOP_N"),
        )
