from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.ids import new_id
from ..common.permissions import require_role
from ..common.validators import parse_role, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: login and self-service password change."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> User:
        if not username or not password:
            raise ValidationError("ユーザーIDとパスワードを入力してください")

        user = self._users.get_by_username(username.strip())
        if not user or not _password_matches(user, password):
            raise AuthenticationError("ユーザーIDまたはパスワードが正しくありません")
        return user

    def change_password(self, *, user_id: str, current_password: str, new_password: str, confirm_password: str) -> None:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("ユーザーが見つかりません")
        if not _password_matches(user, current_password or ""):
            raise ValidationError("現在のパスワードが正しくありません")
        require_min_length(new_password, "新しいパスワード", MIN_PASSWORD_LENGTH)
        if new_password != confirm_password:
            raise ValidationError("新しいパスワードが一致しません")

        self._users.update(replace(user, password_hash=generate_password_hash(new_password)))
        logger.info("Password changed for user %s", user.id)


def _password_matches(user: User, password: str) -> bool:
    try:
        return check_password_hash(user.password_hash, password)
    except ValueError:
        # e.g. empty or corrupted hashes
        return False


class AccountService:
    """Use case: manage accounts (admin only)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_accounts(self, actor: User) -> Sequence[User]:
        require_role(actor, {Role.ADMIN})
        return self._users.list_all()

    def list_students(self) -> List[User]:
        return [u for u in self._users.list_all() if u.role == Role.STUDENT]

    def create_account(
        self,
        actor: User,
        *,
        username: str,
        password: str,
        name: str,
        role: Role | str,
        children_ids: Iterable[str] = (),
        grade: Optional[str] = None,
        classroom: Optional[str] = None,
    ) -> User:
        require_role(actor, {Role.ADMIN})
        username = require_non_empty(username, "ユーザーID")
        name = require_non_empty(name, "名前")
        require_non_empty(password, "パスワード")
        role = parse_role(role) if not isinstance(role, Role) else role

        if self._users.get_by_username(username):
            raise ValidationError("このユーザーIDは既に使用されています")

        user = User(
            id=new_id(),
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
            name=name,
            children_ids=self._checked_children(role, children_ids),
            grade=(grade or "").strip() or None,
            classroom=(classroom or "").strip() or None,
        )
        self._users.add_many([user])
        logger.info("Account %s created (%s)", user.username, user.role.value)
        return user

    def update_account(
        self,
        actor: User,
        user_id: str,
        *,
        username: str,
        password: Optional[str],
        name: str,
        role: Role | str,
        children_ids: Iterable[str] = (),
        grade: Optional[str] = None,
        classroom: Optional[str] = None,
    ) -> User:
        require_role(actor, {Role.ADMIN})
        current = self._users.get_by_id(user_id)
        if not current:
            raise NotFoundError("ユーザーが見つかりません")

        username = require_non_empty(username, "ユーザーID")
        name = require_non_empty(name, "名前")
        role = parse_role(role) if not isinstance(role, Role) else role

        other = self._users.get_by_username(username)
        if other and other.id != current.id:
            raise ValidationError("このユーザーIDは既に使用されています")

        updated = replace(
            current,
            username=username,
            name=name,
            role=role,
            password_hash=generate_password_hash(password) if password else current.password_hash,
            children_ids=self._checked_children(role, children_ids),
            grade=(grade or "").strip() or None,
            classroom=(classroom or "").strip() or None,
        )
        self._users.update(updated)
        return updated

    def delete_account(self, actor: User, user_id: str) -> None:
        require_role(actor, {Role.ADMIN})
        if str(user_id) == actor.id:
            raise ValidationError("自分のアカウントは削除できません")
        if not self._users.delete_by_id(user_id):
            raise NotFoundError("ユーザーが見つかりません")

    def bulk_import(self, actor: User, text: str) -> List[User]:
        """Create accounts from ``username,password,name,role`` lines.

        The batch is all-or-nothing: any bad line rejects every line and the
        error lists each offending line number.
        """

        require_role(actor, {Role.ADMIN})
        if not text or not text.strip():
            raise ValidationError("一括登録するデータを入力してください")

        existing = {u.username for u in self._users.list_all()}
        new_users: List[User] = []
        errors: List[str] = []

        for index, line in enumerate(text.strip().splitlines(), start=1):
            if not line.strip():
                continue
            parts = [p.strip() for p in line.split(",")]
            if len(parts) < 4:
                errors.append(f"行{index}: データが不足しています")
                continue

            username, password, name, role_s = parts[:4]
            if not username or not password or not name:
                errors.append(f"行{index}: データが不足しています")
                continue
            if role_s not in {r.value for r in Role}:
                errors.append(f"行{index}: 無効な役割です ({role_s})")
                continue
            if username in existing:
                errors.append(f"行{index}: ユーザーID {username} は既に存在します")
                continue

            existing.add(username)
            new_users.append(
                User(
                    id=new_id(),
                    username=username,
                    password_hash=generate_password_hash(password),
                    role=Role(role_s),
                    name=name,
                )
            )

        if errors:
            raise ValidationError("\n".join(errors))

        self._users.add_many(new_users)
        logger.info("Bulk import created %d account(s)", len(new_users))
        return new_users

    def _checked_children(self, role: Role, children_ids: Iterable[str]) -> tuple:
        if role != Role.PARENT:
            return ()
        ids = tuple(dict.fromkeys(str(c) for c in children_ids or () if str(c).strip()))
        for child_id in ids:
            child = self._users.get_by_id(child_id)
            if not child or child.role != Role.STUDENT:
                raise NotFoundError(f"生徒が見つかりません (ID: {child_id})")
        return ids
