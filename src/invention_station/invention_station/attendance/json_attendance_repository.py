from __future__ import annotations

from typing import List, Sequence

from ..core.constants import ATTENDANCE_KEY_PREFIX
from ..database.json_collection import JsonCollection
from ..database.kv_store import KeyValueStore
from .model import AttendanceRecord
from .repository import AttendanceRepository


def record_to_wire(rec: AttendanceRecord) -> dict:
    return {"userId": rec.user_id, "userName": rec.user_name, "timestamp": rec.timestamp}


def record_from_wire(data: dict) -> AttendanceRecord:
    return AttendanceRecord(
        user_id=str(data["userId"]),
        user_name=data.get("userName", ""),
        timestamp=data.get("timestamp", ""),
    )


def attendance_key(day: str) -> str:
    return f"{ATTENDANCE_KEY_PREFIX}{day}"


class JsonAttendanceRepository(AttendanceRepository):
    def __init__(self, store: KeyValueStore):
        self._store = store

    def _collection(self, day: str) -> JsonCollection[AttendanceRecord]:
        return JsonCollection(
            self._store, attendance_key(day), to_record=record_to_wire, from_record=record_from_wire
        )

    def list_for_day(self, day: str) -> List[AttendanceRecord]:
        return self._collection(day).load()

    def save_day(self, day: str, records: Sequence[AttendanceRecord]) -> None:
        self._collection(day).save(records)

    def list_days(self) -> List[str]:
        return sorted(k[len(ATTENDANCE_KEY_PREFIX):] for k in self._store.keys(ATTENDANCE_KEY_PREFIX))
