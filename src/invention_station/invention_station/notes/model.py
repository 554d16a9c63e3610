from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Tuple

from .drawing.elements import DrawingElement
from .drawing.log import DrawingLog


@dataclass(frozen=True)
class InventionNote:
    """Domain entity: a student's invention note (text fields + drawing)."""

    id: str
    student_id: str
    student_name: str
    title: str
    description: str = ""
    materials: str = ""
    dimensions: str = ""
    drawing: Tuple[DrawingElement, ...] = field(default_factory=tuple)
    created_at: str = ""
    updated_at: str = ""
    # Stored drawing data that could not be parsed, kept so saving does not erase it.
    unparsed_drawing: Any = field(default=None, compare=False, repr=False)

    def drawing_log(self) -> DrawingLog:
        return DrawingLog(self.drawing)

    def to_view(self, *, include_drawing: bool = True) -> dict:
        view = {
            "id": self.id,
            "student_id": self.student_id,
            "student_name": self.student_name,
            "title": self.title,
            "description": self.description,
            "materials": self.materials,
            "dimensions": self.dimensions,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
        if include_drawing:
            view["drawing"] = self.drawing_log().to_payload()
        return view
