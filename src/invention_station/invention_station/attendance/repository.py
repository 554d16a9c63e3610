from __future__ import annotations

from typing import List, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Attendance is partitioned by day (YYYY-MM-DD)."""

    def list_for_day(self, day: str) -> List[AttendanceRecord]:
        raise NotImplementedError

    def save_day(self, day: str, records: Sequence[AttendanceRecord]) -> None:
        raise NotImplementedError

    def list_days(self) -> List[str]:
        raise NotImplementedError
