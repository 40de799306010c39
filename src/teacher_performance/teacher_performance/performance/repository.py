from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import PerformanceResult, RecalculationScope


class PerformanceRepository(Protocol):
    def replace_scope(
        self,
        scope: RecalculationScope,
        results: Sequence[PerformanceResult],
        *,
        created_by: str,
        created_at: datetime,
    ) -> int:
        """Atomically delete the scope's rows and insert `results`.

        Returns the number of rows inserted. On any failure nothing changes.
        Raises CommitConflictError if another writer holds the scope.
        """

        raise NotImplementedError

    def list_scope(self, scope: RecalculationScope) -> Sequence[PerformanceResult]:
        raise NotImplementedError

    def get_by_id(self, performance_id: int) -> Optional[PerformanceResult]:
        raise NotImplementedError
