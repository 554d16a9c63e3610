from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..core.enums import Priority, Role


@dataclass(frozen=True)
class Notice:
    """Domain entity: announcement targeted at some roles."""

    id: str
    title: str
    content: str
    target_audience: Tuple[Role, ...]
    priority: Priority
    created_at: str
    created_by: str

    def visible_to(self, role: Role) -> bool:
        return role in self.target_audience

    def to_view(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "target_audience": [r.value for r in self.target_audience],
            "priority": self.priority.value,
            "priority_label": self.priority.label,
            "created_at": self.created_at,
            "created_by": self.created_by,
        }
