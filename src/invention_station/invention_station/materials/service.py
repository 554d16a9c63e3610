from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Iterable, List, Optional

from ..common.datetime_utils import today_iso
from ..common.ids import new_id
from ..common.permissions import require_role
from ..common.validators import parse_roles, require_non_empty
from ..core.enums import STAFF_ROLES
from ..core.exceptions import AuthorizationError, NotFoundError
from ..users.model import User
from .model import Material
from .repository import MaterialRepository

ALL = "all"


class MaterialService:
    def __init__(self, materials: MaterialRepository):
        self._materials = materials

    def list_visible(self, actor: User, *, category: str = ALL) -> List[Material]:
        return [
            m
            for m in self._materials.list_all()
            if m.visible_to(actor.role) and (category in (ALL, "", None) or m.category == category)
        ]

    def categories(self) -> List[str]:
        return list(dict.fromkeys(m.category for m in self._materials.list_all() if m.category))

    def get(self, actor: User, material_id: str) -> Material:
        material = self._materials.get_by_id(material_id)
        if not material:
            raise NotFoundError("教材が見つかりません")
        if not material.visible_to(actor.role):
            raise AuthorizationError("この教材を閲覧する権限がありません")
        return material

    def create(
        self,
        actor: User,
        *,
        title: str,
        description: str = "",
        category: str = "",
        target_audience: Iterable[str] = (),
        file_url: Optional[str] = None,
        now: datetime | None = None,
    ) -> Material:
        require_role(actor, STAFF_ROLES)
        material = Material(
            id=new_id(),
            title=require_non_empty(title, "タイトル"),
            description=(description or "").strip(),
            category=(category or "").strip(),
            target_audience=parse_roles(target_audience),
            created_at=today_iso(now),
            file_url=(file_url or "").strip() or None,
        )
        self._materials.add(material)
        return material

    def update(
        self,
        actor: User,
        material_id: str,
        *,
        title: str,
        description: str = "",
        category: str = "",
        target_audience: Iterable[str] = (),
        file_url: Optional[str] = None,
    ) -> Material:
        require_role(actor, STAFF_ROLES)
        current = self._materials.get_by_id(material_id)
        if not current:
            raise NotFoundError("教材が見つかりません")

        updated = replace(
            current,
            title=require_non_empty(title, "タイトル"),
            description=(description or "").strip(),
            category=(category or "").strip(),
            target_audience=parse_roles(target_audience),
            file_url=(file_url or "").strip() or None,
        )
        self._materials.update(updated)
        return updated

    def delete(self, actor: User, material_id: str) -> None:
        require_role(actor, STAFF_ROLES)
        if not self._materials.delete_by_id(material_id):
            raise NotFoundError("教材が見つかりません")
