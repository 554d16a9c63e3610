from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import List, Optional

from ..common.datetime_utils import parse_hhmm, parse_iso_date, week_dates, week_start_for
from ..common.ids import new_id
from ..common.permissions import require_role
from ..core.constants import DEFAULT_UPCOMING_LIMIT
from ..core.enums import FAMILY_ROLES, STAFF_ROLES, Role
from ..core.exceptions import NotFoundError, ValidationError
from ..users.model import User
from ..users.repository import UserRepository
from .model import Shift
from .repository import ShiftRepository

DAY_LABELS = ["月", "火", "水", "木", "金", "土", "日"]


@dataclass(frozen=True)
class WeekDay:
    date: date
    label: str
    shifts: List[Shift]


@dataclass(frozen=True)
class ScheduleView:
    """Read-model for the student/parent schedule screen."""

    shifts: List[Shift]
    grades: List[str]
    classrooms: List[str]
    user_grade: str
    user_classroom: str


@dataclass(frozen=True)
class _ValidShift:
    instructor: User
    date: str
    start_time: str
    end_time: str
    activity: str


class ShiftService:
    def __init__(self, shifts: ShiftRepository, users: UserRepository):
        self._shifts = shifts
        self._users = users

    def week(self, actor: User, *, week_start: date) -> List[WeekDay]:
        """Seven Monday-based days with their shifts sorted by start time."""

        require_role(actor, STAFF_ROLES)
        start = week_start_for(week_start)
        by_date: dict[str, List[Shift]] = {}
        for s in self._shifts.list_all():
            by_date.setdefault(s.date, []).append(s)

        return [
            WeekDay(
                date=d,
                label=DAY_LABELS[d.weekday()],
                shifts=sorted(by_date.get(d.isoformat(), []), key=lambda s: s.start_time),
            )
            for d in week_dates(start)
        ]

    def get(self, actor: User, shift_id: str) -> Shift:
        require_role(actor, STAFF_ROLES)
        shift = self._shifts.get_by_id(shift_id)
        if not shift:
            raise NotFoundError("シフトが見つかりません")
        return shift

    def upcoming(self, *, today: date, limit: Optional[int] = DEFAULT_UPCOMING_LIMIT) -> List[Shift]:
        today_s = today.isoformat()
        items = sorted(
            (s for s in self._shifts.list_all() if s.date >= today_s),
            key=lambda s: (s.date, s.start_time),
        )
        return items[:limit] if limit is not None else items

    def _validated(
        self, *, instructor_id: str, work_date: str, start_time: str, end_time: str, activity: str
    ) -> _ValidShift:
        instructor = self._users.get_by_id(str(instructor_id or ""))
        if not instructor or instructor.role not in STAFF_ROLES:
            raise NotFoundError("指導員が見つかりません")

        try:
            day = parse_iso_date(work_date or "")
        except (TypeError, ValueError):
            raise ValidationError("日付が正しくありません")
        try:
            start = parse_hhmm(start_time or "")
            end = parse_hhmm(end_time or "")
        except (TypeError, ValueError):
            raise ValidationError("時刻が正しくありません")
        if end <= start:
            raise ValidationError("終了時刻は開始時刻より後にしてください")

        # Stored zero-padded so string order is date/time order.
        return _ValidShift(
            instructor=instructor,
            date=day.isoformat(),
            start_time=start.strftime("%H:%M"),
            end_time=end.strftime("%H:%M"),
            activity=(activity or "").strip(),
        )

    def create(
        self,
        actor: User,
        *,
        instructor_id: str,
        work_date: str,
        start_time: str,
        end_time: str,
        activity: str = "",
    ) -> Shift:
        require_role(actor, {Role.ADMIN})
        valid = self._validated(
            instructor_id=instructor_id, work_date=work_date, start_time=start_time, end_time=end_time, activity=activity
        )
        shift = Shift(
            id=new_id(),
            instructor_id=valid.instructor.id,
            instructor_name=valid.instructor.name,
            date=valid.date,
            start_time=valid.start_time,
            end_time=valid.end_time,
            activity=valid.activity,
        )
        self._shifts.add(shift)
        return shift

    def update(
        self,
        actor: User,
        shift_id: str,
        *,
        instructor_id: str,
        work_date: str,
        start_time: str,
        end_time: str,
        activity: str = "",
    ) -> Shift:
        require_role(actor, {Role.ADMIN})
        current = self._shifts.get_by_id(shift_id)
        if not current:
            raise NotFoundError("シフトが見つかりません")

        valid = self._validated(
            instructor_id=instructor_id, work_date=work_date, start_time=start_time, end_time=end_time, activity=activity
        )
        updated = replace(
            current,
            instructor_id=valid.instructor.id,
            instructor_name=valid.instructor.name,
            date=valid.date,
            start_time=valid.start_time,
            end_time=valid.end_time,
            activity=valid.activity,
        )
        self._shifts.update(updated)
        return updated

    def delete(self, actor: User, shift_id: str) -> None:
        require_role(actor, {Role.ADMIN})
        if not self._shifts.delete_by_id(shift_id):
            raise NotFoundError("シフトが見つかりません")

    def schedule(self, actor: User, *, today: date) -> ScheduleView:
        """Upcoming activities for students and parents.

        A parent sees the grade/classroom of their first linked child.
        """

        require_role(actor, FAMILY_ROLES, "このページは生徒・保護者のみ閲覧できます")
        students = [u for u in self._users.list_all() if u.role == Role.STUDENT]

        subject: Optional[User] = actor if actor.role == Role.STUDENT else None
        if actor.role == Role.PARENT and actor.children_ids:
            subject = self._users.get_by_id(actor.children_ids[0])

        return ScheduleView(
            shifts=self.upcoming(today=today, limit=None),
            grades=list(dict.fromkeys(s.grade for s in students if s.grade)),
            classrooms=list(dict.fromkeys(s.classroom for s in students if s.classroom)),
            user_grade=(subject.grade if subject else None) or "",
            user_classroom=(subject.classroom if subject else None) or "",
        )
