from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Teacher, TeachingAssignment


class TeacherRepository(Protocol):
    """Read contract over the employee registry.

    Note (DIP): the scoring services depend on this interface only.
    """

    def get_active_teachers(self, campus_id: Optional[int] = None) -> Sequence[Teacher]:
        raise NotImplementedError

    def get_active_assignments(self, teacher_id: int) -> Sequence[TeachingAssignment]:
        raise NotImplementedError
