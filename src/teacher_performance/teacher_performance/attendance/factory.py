from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_FLEXIBILITY_EXTRA_MINUTES, DEFAULT_ON_TIME_GRACE_MINUTES
from ..core.enums import PunctualityMode
from .strategies.base import PunctualityRule
from .strategies.fixed_strategy import FixedGraceRule
from .strategies.flexibility_strategy import FlexibilityRule


@dataclass
class PunctualityRuleFactory:
    """Factory Pattern: one configured punctuality rule for the whole engine."""

    grace_minutes: int = DEFAULT_ON_TIME_GRACE_MINUTES
    extra_minutes: int = DEFAULT_FLEXIBILITY_EXTRA_MINUTES

    def for_mode(self, mode: PunctualityMode) -> PunctualityRule:
        if mode == PunctualityMode.FLEXIBILITY:
            return FlexibilityRule(self.extra_minutes)
        return FixedGraceRule(self.grace_minutes)
