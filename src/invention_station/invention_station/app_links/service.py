from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from ..common.ids import new_id
from ..common.permissions import require_role
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from ..users.model import User
from .model import DEFAULT_CATEGORY, DEFAULT_ICON, AppLink
from .repository import AppLinkRepository


class AppLinkService:
    def __init__(self, links: AppLinkRepository):
        self._links = links

    def list_all(self) -> Sequence[AppLink]:
        return self._links.list_all()

    def _validated(self, title: str, url: str) -> tuple[str, str]:
        title = (title or "").strip()
        url = (url or "").strip()
        if not title or not url:
            raise ValidationError("タイトルとURLは必須です")
        return title, url

    def create(
        self,
        actor: User,
        *,
        title: str,
        url: str,
        icon: Optional[str] = None,
        description: str = "",
        category: Optional[str] = None,
    ) -> AppLink:
        require_role(actor, {Role.ADMIN})
        title, url = self._validated(title, url)
        link = AppLink(
            id=new_id(),
            title=title,
            url=url,
            icon=icon or DEFAULT_ICON,
            description=(description or "").strip(),
            category=category or DEFAULT_CATEGORY,
        )
        self._links.add(link)
        return link

    def update(
        self,
        actor: User,
        link_id: str,
        *,
        title: str,
        url: str,
        icon: Optional[str] = None,
        description: str = "",
        category: Optional[str] = None,
    ) -> AppLink:
        require_role(actor, {Role.ADMIN})
        current = self._links.get_by_id(link_id)
        if not current:
            raise NotFoundError("リンクが見つかりません")
        title, url = self._validated(title, url)
        updated = replace(
            current,
            title=title,
            url=url,
            icon=icon or DEFAULT_ICON,
            description=(description or "").strip(),
            category=category or DEFAULT_CATEGORY,
        )
        self._links.update(updated)
        return updated

    def delete(self, actor: User, link_id: str) -> None:
        require_role(actor, {Role.ADMIN})
        if not self._links.delete_by_id(link_id):
            raise NotFoundError("リンクが見つかりません")
