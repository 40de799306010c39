from __future__ import annotations

from typing import Iterable, Protocol, TypeVar


class ActiveRecord(Protocol):
    """Anything with a soft-delete flag."""

    @property
    def is_active(self) -> bool: ...


T = TypeVar("T", bound=ActiveRecord)


def only_active(items: Iterable[T]) -> list[T]:
    return [item for item in items if item.is_active]
