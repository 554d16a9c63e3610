from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Iterable, List, Optional

from ..common.datetime_utils import today_iso
from ..common.ids import new_id
from ..common.permissions import require_role
from ..common.validators import parse_roles, require_non_empty
from ..core.enums import STAFF_ROLES, Priority
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.model import User
from .model import Notice
from .repository import NoticeRepository

ALL = "all"


def _parse_priority(value: Optional[str]) -> Priority:
    try:
        return Priority(value or Priority.MEDIUM.value)
    except ValueError:
        raise ValidationError(f"無効な優先度です ({value})")


class NoticeService:
    def __init__(self, notices: NoticeRepository):
        self._notices = notices

    def list_visible(self, actor: User, *, priority: str = ALL, limit: Optional[int] = None) -> List[Notice]:
        """Notices addressed to the actor's role, newest first."""

        items = [
            n
            for n in self._notices.list_all()
            if n.visible_to(actor.role) and (priority in (ALL, "", None) or n.priority.value == priority)
        ]
        # ISO dates sort chronologically as strings
        items.sort(key=lambda n: n.created_at, reverse=True)
        return items[:limit] if limit is not None else items

    def get(self, actor: User, notice_id: str) -> Notice:
        notice = self._notices.get_by_id(notice_id)
        if not notice:
            raise NotFoundError("お知らせが見つかりません")
        if not notice.visible_to(actor.role):
            raise AuthorizationError("このお知らせを閲覧する権限がありません")
        return notice

    def create(
        self,
        actor: User,
        *,
        title: str,
        content: str = "",
        target_audience: Iterable[str] = (),
        priority: Optional[str] = None,
        now: datetime | None = None,
    ) -> Notice:
        require_role(actor, STAFF_ROLES)
        notice = Notice(
            id=new_id(),
            title=require_non_empty(title, "タイトル"),
            content=(content or "").strip(),
            target_audience=parse_roles(target_audience),
            priority=_parse_priority(priority),
            created_at=today_iso(now),
            created_by=actor.name,
        )
        self._notices.add(notice)
        return notice

    def update(
        self,
        actor: User,
        notice_id: str,
        *,
        title: str,
        content: str = "",
        target_audience: Iterable[str] = (),
        priority: Optional[str] = None,
    ) -> Notice:
        require_role(actor, STAFF_ROLES)
        current = self._notices.get_by_id(notice_id)
        if not current:
            raise NotFoundError("お知らせが見つかりません")

        updated = replace(
            current,
            title=require_non_empty(title, "タイトル"),
            content=(content or "").strip(),
            target_audience=parse_roles(target_audience),
            priority=_parse_priority(priority),
        )
        self._notices.update(updated)
        return updated

    def delete(self, actor: User, notice_id: str) -> None:
        require_role(actor, STAFF_ROLES)
        if not self._notices.delete_by_id(notice_id):
            raise NotFoundError("お知らせが見つかりません")
