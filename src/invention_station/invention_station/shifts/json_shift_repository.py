from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import SHIFTS_KEY
from ..database.json_collection import JsonCollection
from ..database.kv_store import KeyValueStore
from .model import Shift
from .repository import ShiftRepository


def shift_to_record(s: Shift) -> dict:
    return {
        "id": s.id,
        "instructorId": s.instructor_id,
        "instructorName": s.instructor_name,
        "date": s.date,
        "startTime": s.start_time,
        "endTime": s.end_time,
        "activity": s.activity,
    }


def shift_from_record(rec: dict) -> Shift:
    return Shift(
        id=str(rec["id"]),
        instructor_id=str(rec["instructorId"]),
        instructor_name=rec.get("instructorName", ""),
        date=rec["date"],
        start_time=rec.get("startTime", ""),
        end_time=rec.get("endTime", ""),
        activity=rec.get("activity", ""),
    )


class JsonShiftRepository(ShiftRepository):
    def __init__(self, store: KeyValueStore):
        self._items = JsonCollection(store, SHIFTS_KEY, to_record=shift_to_record, from_record=shift_from_record)

    def list_all(self) -> Sequence[Shift]:
        return self._items.load()

    def get_by_id(self, shift_id: str) -> Optional[Shift]:
        return self._items.find(lambda s: s.id == str(shift_id))

    def add(self, shift: Shift) -> None:
        self._items.append(shift)

    def update(self, shift: Shift) -> bool:
        return self._items.replace(lambda s: s.id == shift.id, shift)

    def delete_by_id(self, shift_id: str) -> bool:
        return self._items.remove(lambda s: s.id == str(shift_id))
