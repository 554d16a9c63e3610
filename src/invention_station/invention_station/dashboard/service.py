from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional

from ..core.constants import DEFAULT_UPCOMING_LIMIT
from ..core.enums import FAMILY_ROLES, STAFF_ROLES, Role
from ..materials.model import Material
from ..materials.service import MaterialService
from ..notices.model import Notice
from ..notices.service import NoticeService
from ..shifts.model import Shift
from ..shifts.service import ShiftService
from ..users.model import User
from ..users.repository import UserRepository


def access_flags(role: Role) -> Dict[str, bool]:
    """Which screens a role may open."""

    return {
        "materials": True,
        "shifts": role in STAFF_ROLES,
        "accounts": role == Role.ADMIN,
        "attendance": role in STAFF_ROLES,
        "schedule": role in FAMILY_ROLES,
        "invention_notes": True,
        "app_links": True,
        "notices": True,
    }


@dataclass(frozen=True)
class DashboardView:
    role_label: str
    access: Dict[str, bool]
    material_count: int
    recent_materials: List[Material]
    upcoming_shifts: List[Shift]
    recent_notices: List[Notice]
    user_count: Optional[int] = None


class DashboardService:
    def __init__(
        self,
        *,
        materials: MaterialService,
        shifts: ShiftService,
        notices: NoticeService,
        users: UserRepository,
        limit: int = DEFAULT_UPCOMING_LIMIT,
    ):
        self._materials = materials
        self._shifts = shifts
        self._notices = notices
        self._users = users
        self._limit = int(limit)

    def overview(self, actor: User, *, today: date) -> DashboardView:
        materials = self._materials.list_visible(actor)
        return DashboardView(
            role_label=actor.role.label,
            access=access_flags(actor.role),
            material_count=len(materials),
            recent_materials=materials[: self._limit],
            upcoming_shifts=self._shifts.upcoming(today=today, limit=self._limit),
            recent_notices=self._notices.list_visible(actor, limit=self._limit),
            user_count=len(self._users.list_all()) if actor.role == Role.ADMIN else None,
        )
