from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..core.constants import INVENTION_NOTES_KEY
from ..database.json_collection import JsonCollection
from ..database.kv_store import KeyValueStore
from .drawing.log import DrawingLog
from .model import InventionNote
from .repository import InventionNoteRepository

logger = logging.getLogger(__name__)


def note_to_record(note: InventionNote) -> dict:
    # The drawing is nested as a plain array, encoded once with the record.
    return {
        "id": note.id,
        "studentId": note.student_id,
        "studentName": note.student_name,
        "title": note.title,
        "description": note.description,
        "materials": note.materials,
        "dimensions": note.dimensions,
        "drawingData": note.drawing_log().to_payload() if note.unparsed_drawing is None else note.unparsed_drawing,
        "createdAt": note.created_at,
        "updatedAt": note.updated_at,
    }


def note_from_record(rec: dict) -> InventionNote:
    raw = rec.get("drawingData")
    try:
        drawing, unparsed = DrawingLog.parse_stored(raw).elements, None
    except (KeyError, TypeError, ValueError) as e:
        logger.warning("Unreadable drawing in note %s: %s", rec.get("id"), e)
        drawing, unparsed = (), raw

    return InventionNote(
        id=str(rec["id"]),
        student_id=str(rec["studentId"]),
        student_name=rec.get("studentName", ""),
        title=rec.get("title", ""),
        description=rec.get("description", ""),
        materials=rec.get("materials", ""),
        dimensions=rec.get("dimensions", ""),
        drawing=drawing,
        created_at=rec.get("createdAt", ""),
        updated_at=rec.get("updatedAt", ""),
        unparsed_drawing=unparsed,
    )


class JsonInventionNoteRepository(InventionNoteRepository):
    def __init__(self, store: KeyValueStore):
        self._items = JsonCollection(
            store, INVENTION_NOTES_KEY, to_record=note_to_record, from_record=note_from_record
        )

    def list_all(self) -> Sequence[InventionNote]:
        return self._items.load()

    def get_by_id(self, note_id: str) -> Optional[InventionNote]:
        return self._items.find(lambda n: n.id == str(note_id))

    def add(self, note: InventionNote) -> None:
        self._items.append(note)

    def update(self, note: InventionNote) -> bool:
        return self._items.replace(lambda n: n.id == note.id, note)

    def delete_by_id(self, note_id: str) -> bool:
        return self._items.remove(lambda n: n.id == str(note_id))
