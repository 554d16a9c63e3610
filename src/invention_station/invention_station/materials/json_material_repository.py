from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import MATERIALS_KEY
from ..core.enums import Role
from ..database.json_collection import JsonCollection, as_str_list
from ..database.kv_store import KeyValueStore
from .model import Material
from .repository import MaterialRepository


def material_to_record(m: Material) -> dict:
    rec = {
        "id": m.id,
        "title": m.title,
        "description": m.description,
        "category": m.category,
        "targetAudience": [r.value for r in m.target_audience],
        "createdAt": m.created_at,
    }
    if m.file_url:
        rec["fileUrl"] = m.file_url
    return rec


def material_from_record(rec: dict) -> Material:
    return Material(
        id=str(rec["id"]),
        title=rec["title"],
        description=rec.get("description", ""),
        category=rec.get("category", ""),
        target_audience=tuple(Role(r) for r in as_str_list(rec.get("targetAudience"))),
        created_at=rec.get("createdAt", ""),
        file_url=rec.get("fileUrl") or None,
    )


class JsonMaterialRepository(MaterialRepository):
    def __init__(self, store: KeyValueStore):
        self._items = JsonCollection(
            store, MATERIALS_KEY, to_record=material_to_record, from_record=material_from_record
        )

    def list_all(self) -> Sequence[Material]:
        return self._items.load()

    def get_by_id(self, material_id: str) -> Optional[Material]:
        return self._items.find(lambda m: m.id == str(material_id))

    def add(self, material: Material) -> None:
        self._items.append(material)

    def update(self, material: Material) -> bool:
        return self._items.replace(lambda m: m.id == material.id, material)

    def delete_by_id(self, material_id: str) -> bool:
        return self._items.remove(lambda m: m.id == str(material_id))
