from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: portal account.

    Note: plain data object, no storage access. ``children_ids`` is only used
    by parents, ``grade``/``classroom`` only by students.
    """

    id: str
    username: str
    password_hash: str
    role: Role
    name: str
    children_ids: Tuple[str, ...] = field(default_factory=tuple)
    grade: Optional[str] = None
    classroom: Optional[str] = None

    def is_parent_of(self, student_id: str) -> bool:
        return self.role == Role.PARENT and student_id in self.children_ids

    def public_view(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "role": self.role.value,
            "role_label": self.role.label,
            "name": self.name,
            "children_ids": list(self.children_ids),
            "grade": self.grade,
            "classroom": self.classroom,
        }
