from __future__ import annotations

from typing import Iterable, Optional

from ..core.enums import Role
from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name}は必須です")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name}は{min_len}文字以上で入力してください")
    return value


def parse_role(value: str) -> Role:
    try:
        return Role(str(value).strip())
    except ValueError:
        raise ValidationError(f"無効な役割です ({value})")


def parse_roles(values: Iterable[str]) -> tuple[Role, ...]:
    roles: list[Role] = []
    for v in values or ():
        role = parse_role(v)
        if role not in roles:
            roles.append(role)
    return tuple(roles)
