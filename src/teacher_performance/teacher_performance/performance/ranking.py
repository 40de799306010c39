from __future__ import annotations

from typing import Iterable, Optional

from .model import PerformanceResult


def ranking_key(result: PerformanceResult) -> tuple:
    """Highest total first; ties go to teacher name, then id."""
    return (-result.total_score, result.teacher_name.casefold(), result.teacher_id)


class RankingReporter:
    def __init__(self, results: Iterable[PerformanceResult]):
        self._ordered = sorted(results, key=ranking_key)

    def ordered(self) -> list[PerformanceResult]:
        return list(self._ordered)

    def top(self, n: int) -> list[PerformanceResult]:
        if n <= 0:
            return []
        return self._ordered[:n]

    def rank_of(self, teacher_id: int) -> Optional[int]:
        for position, result in enumerate(self._ordered, start=1):
            if result.teacher_id == teacher_id:
                return position
        return None

    def __len__(self) -> int:
        return len(self._ordered)
