from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator

from ..core.exceptions import CommitConflictError
from .model import RecalculationScope


class ScopeLockRegistry:
    """In-process mutual exclusion for commits.

    Two scopes conflict when they overlap: same month/year and either the same
    campus or one of them covers all campuses. Acquisition never waits.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._held: set[RecalculationScope] = set()

    def acquire(self, scope: RecalculationScope) -> None:
        with self._guard:
            if any(scope.overlaps(other) for other in self._held):
                raise CommitConflictError(f"A commit for {scope} is already running")
            self._held.add(scope)

    def release(self, scope: RecalculationScope) -> None:
        with self._guard:
            self._held.discard(scope)

    @contextmanager
    def hold(self, scope: RecalculationScope) -> Iterator[None]:
        self.acquire(scope)
        try:
            yield
        finally:
            self.release(scope)

    def is_held(self, scope: RecalculationScope) -> bool:
        with self._guard:
            return any(scope.overlaps(other) for other in self._held)
