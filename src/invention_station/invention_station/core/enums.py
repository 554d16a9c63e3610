from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Club roles used for screen and action permissions."""

    ADMIN = "admin"
    INSTRUCTOR = "instructor"
    STUDENT = "student"
    PARENT = "parent"

    @property
    def label(self) -> str:
        return ROLE_LABELS[self]


ROLE_LABELS = {
    Role.ADMIN: "職員",
    Role.INSTRUCTOR: "指導員",
    Role.STUDENT: "生徒",
    Role.PARENT: "保護者",
}

STAFF_ROLES = frozenset({Role.ADMIN, Role.INSTRUCTOR})
FAMILY_ROLES = frozenset({Role.STUDENT, Role.PARENT})


class Priority(str, Enum):
    """Notice priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def label(self) -> str:
        return {Priority.LOW: "低", Priority.MEDIUM: "中", Priority.HIGH: "高"}[self]


class DrawingTool(str, Enum):
    """Kinds of drawing element (and the tools that produce them)."""

    PENCIL = "pencil"
    ERASER = "eraser"
    LINE = "line"
    CIRCLE = "circle"
    RECTANGLE = "rectangle"

    @property
    def is_stroke(self) -> bool:
        return self in (DrawingTool.PENCIL, DrawingTool.ERASER)
