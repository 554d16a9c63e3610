from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import NOTICES_KEY
from ..core.enums import Priority, Role
from ..database.json_collection import JsonCollection, as_str_list
from ..database.kv_store import KeyValueStore
from .model import Notice
from .repository import NoticeRepository


def notice_to_record(n: Notice) -> dict:
    return {
        "id": n.id,
        "title": n.title,
        "content": n.content,
        "targetAudience": [r.value for r in n.target_audience],
        "priority": n.priority.value,
        "createdAt": n.created_at,
        "createdBy": n.created_by,
    }


def notice_from_record(rec: dict) -> Notice:
    return Notice(
        id=str(rec["id"]),
        title=rec["title"],
        content=rec.get("content", ""),
        target_audience=tuple(Role(r) for r in as_str_list(rec.get("targetAudience"))),
        priority=Priority(rec.get("priority", Priority.MEDIUM.value)),
        created_at=rec.get("createdAt", ""),
        created_by=rec.get("createdBy", ""),
    )


class JsonNoticeRepository(NoticeRepository):
    def __init__(self, store: KeyValueStore):
        self._items = JsonCollection(store, NOTICES_KEY, to_record=notice_to_record, from_record=notice_from_record)

    def list_all(self) -> Sequence[Notice]:
        return self._items.load()

    def get_by_id(self, notice_id: str) -> Optional[Notice]:
        return self._items.find(lambda n: n.id == str(notice_id))

    def add(self, notice: Notice) -> None:
        self._items.append(notice)

    def update(self, notice: Notice) -> bool:
        return self._items.replace(lambda n: n.id == notice.id, notice)

    def delete_by_id(self, notice_id: str) -> bool:
        return self._items.remove(lambda n: n.id == str(notice_id))
