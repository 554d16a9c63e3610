from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import APP_LINKS_KEY
from ..database.json_collection import JsonCollection
from ..database.kv_store import KeyValueStore
from .model import DEFAULT_CATEGORY, DEFAULT_ICON, AppLink
from .repository import AppLinkRepository


def app_link_from_record(rec: dict) -> AppLink:
    return AppLink(
        id=str(rec["id"]),
        title=rec["title"],
        url=rec["url"],
        icon=rec.get("icon") or DEFAULT_ICON,
        description=rec.get("description", ""),
        category=rec.get("category") or DEFAULT_CATEGORY,
    )


class JsonAppLinkRepository(AppLinkRepository):
    def __init__(self, store: KeyValueStore):
        self._items = JsonCollection(
            store, APP_LINKS_KEY, to_record=AppLink.to_view, from_record=app_link_from_record
        )

    def list_all(self) -> Sequence[AppLink]:
        return self._items.load()

    def get_by_id(self, link_id: str) -> Optional[AppLink]:
        return self._items.find(lambda link: link.id == str(link_id))

    def add(self, link: AppLink) -> None:
        self._items.append(link)

    def update(self, link: AppLink) -> bool:
        return self._items.replace(lambda current: current.id == link.id, link)

    def delete_by_id(self, link_id: str) -> bool:
        return self._items.remove(lambda link: link.id == str(link_id))
