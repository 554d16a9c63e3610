from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import USERS_KEY
from ..core.enums import Role
from ..database.json_collection import JsonCollection, as_str_list
from ..database.kv_store import KeyValueStore
from .model import User
from .repository import UserRepository


def user_to_record(user: User) -> dict:
    rec = {
        "id": user.id,
        "username": user.username,
        "passwordHash": user.password_hash,
        "role": user.role.value,
        "name": user.name,
        "childrenIds": list(user.children_ids),
    }
    if user.grade:
        rec["grade"] = user.grade
    if user.classroom:
        rec["classroom"] = user.classroom
    return rec


def user_from_record(rec: dict) -> User:
    return User(
        id=str(rec["id"]),
        username=rec["username"],
        password_hash=rec.get("passwordHash", ""),
        role=Role(rec["role"]),
        name=rec.get("name", ""),
        children_ids=tuple(as_str_list(rec.get("childrenIds"))),
        grade=rec.get("grade") or None,
        classroom=rec.get("classroom") or None,
    )


class JsonUserRepository(UserRepository):
    def __init__(self, store: KeyValueStore):
        self._users = JsonCollection(store, USERS_KEY, to_record=user_to_record, from_record=user_from_record)

    def list_all(self) -> Sequence[User]:
        return self._users.load()

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._users.find(lambda u: u.id == str(user_id))

    def get_by_username(self, username: str) -> Optional[User]:
        return self._users.find(lambda u: u.username == username)

    def add_many(self, users: Sequence[User]) -> None:
        items = self._users.load()
        items.extend(users)
        self._users.save(items)

    def update(self, user: User) -> bool:
        return self._users.replace(lambda u: u.id == user.id, user)

    def delete_by_id(self, user_id: str) -> bool:
        return self._users.remove(lambda u: u.id == str(user_id))
