from __future__ import annotations

from typing import Iterable

from ..core.enums import Role
from ..core.exceptions import AuthorizationError


def require_role(actor, roles: Iterable[Role], message: str = "この操作を行う権限がありません") -> None:
    if actor is None or actor.role not in set(roles):
        raise AuthorizationError(message)
