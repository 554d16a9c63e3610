from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Shift:
    """Domain entity: an instructor's activity slot (Shift).

    ``date`` is YYYY-MM-DD, times are HH:MM, so string order is time order.
    """

    id: str
    instructor_id: str
    instructor_name: str
    date: str
    start_time: str
    end_time: str
    activity: str

    def to_view(self) -> dict:
        return {
            "id": self.id,
            "instructor_id": self.instructor_id,
            "instructor_name": self.instructor_name,
            "date": self.date,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "activity": self.activity,
        }
