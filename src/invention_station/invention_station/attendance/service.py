from __future__ import annotations

from datetime import datetime
import logging
from typing import List

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.permissions import require_role
from ..core.enums import STAFF_ROLES, Role
from ..core.exceptions import DuplicateActionError, NotFoundError, ValidationError
from ..users.model import User
from ..users.repository import UserRepository
from .model import AttendanceRecord, RosterEntry
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

ACCESS_MESSAGE = "出席管理にアクセスする権限がありません"


class AttendanceService:
    """Use case: daily attendance taken by staff (QR scan or manual entry)."""

    def __init__(self, attendance: AttendanceRepository, users: UserRepository):
        self._attendance = attendance
        self._users = users

    def record(self, actor: User, user_id: str, *, now: datetime | None = None) -> AttendanceRecord:
        """Record ``user_id`` as present on the day of ``now``.

        The same checks apply to a scanned QR payload and to a typed id.
        """

        require_role(actor, STAFF_ROLES, ACCESS_MESSAGE)
        user_id = (user_id or "").strip()
        if not user_id:
            raise ValidationError("ユーザーIDを入力してください。")

        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("ユーザーが見つかりません。")

        now = now or now_local()
        day = now.date().isoformat()
        records = self._attendance.list_for_day(day)
        if any(r.user_id == user.id for r in records):
            raise DuplicateActionError(f"{user.name}さんは既に出席済みです。")

        record = AttendanceRecord(user_id=user.id, user_name=user.name, timestamp=now.isoformat())
        self._attendance.save_day(day, [*records, record])
        logger.info("Attendance recorded for %s on %s", user.id, day)
        return record

    def remove(self, actor: User, user_id: str, *, day: str) -> None:
        require_role(actor, STAFF_ROLES, ACCESS_MESSAGE)
        day = _checked_day(day)
        records = self._attendance.list_for_day(day)
        kept = [r for r in records if r.user_id != str(user_id)]
        if len(kept) == len(records):
            raise NotFoundError("出席記録が見つかりません")
        self._attendance.save_day(day, kept)

    def list_for(self, actor: User, *, day: str) -> List[AttendanceRecord]:
        require_role(actor, STAFF_ROLES, ACCESS_MESSAGE)
        return self._attendance.list_for_day(_checked_day(day))

    def roster(self, actor: User, *, day: str) -> List[RosterEntry]:
        """All students with a flag telling whether they are recorded for ``day``."""

        require_role(actor, STAFF_ROLES, ACCESS_MESSAGE)
        present = {r.user_id for r in self._attendance.list_for_day(_checked_day(day))}
        return [
            RosterEntry(
                user_id=u.id,
                name=u.name,
                grade=u.grade,
                classroom=u.classroom,
                recorded=u.id in present,
            )
            for u in self._users.list_all()
            if u.role == Role.STUDENT
        ]

    def days(self, actor: User) -> List[str]:
        require_role(actor, STAFF_ROLES, ACCESS_MESSAGE)
        return self._attendance.list_days()


def _checked_day(day: str) -> str:
    try:
        return parse_iso_date(day).isoformat()
    except (TypeError, ValueError):
        raise ValidationError("日付の形式が正しくありません (YYYY-MM-DD)")
