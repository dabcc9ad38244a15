from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import Role
from ..core.exceptions import AuthorizationError


@dataclass(frozen=True)
class AuthContext:
    """Who is making the request.

    ``student_id`` is set for student users; ``ward_ids`` lists the students
    a parent account is linked to.
    """

    user_id: int
    role: Role
    student_id: Optional[int] = None
    ward_ids: frozenset[int] = field(default_factory=frozenset)

    def can_view_student(self, student_id: int) -> bool:
        if self.role in {Role.ADMIN, Role.TEACHER}:
            return True
        if self.role == Role.STUDENT:
            return self.student_id == student_id
        if self.role == Role.PARENT:
            return student_id in self.ward_ids
        return False

    def can_act_for_student(self, student_id: int) -> bool:
        """Students act for themselves, parents for a linked ward."""
        if self.role == Role.STUDENT:
            return self.student_id == student_id
        if self.role == Role.PARENT:
            return student_id in self.ward_ids
        return False

    def require_view(self, student_id: int) -> None:
        if not self.can_view_student(student_id):
            raise AuthorizationError("Not allowed to view this student")
