from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.enums import Role


@dataclass(frozen=True)
class Material:
    """Domain entity: teaching material."""

    id: str
    title: str
    description: str
    category: str
    target_audience: Tuple[Role, ...]
    created_at: str
    file_url: Optional[str] = None

    def visible_to(self, role: Role) -> bool:
        return role in self.target_audience

    def to_view(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "target_audience": [r.value for r in self.target_audience],
            "target_labels": [r.label for r in self.target_audience],
            "file_url": self.file_url,
            "created_at": self.created_at,
        }
