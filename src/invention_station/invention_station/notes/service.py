from __future__ import annotations

from dataclasses import replace
from datetime import datetime
import logging
from typing import List, Optional

from ..common.datetime_utils import today_iso
from ..common.ids import new_id
from ..common.permissions import require_role
from ..core.constants import CANVAS_HEIGHT, CANVAS_WIDTH
from ..core.enums import STAFF_ROLES, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.model import User
from .drawing.log import DrawingLog
from .drawing.renderer import render_png
from .model import InventionNote
from .repository import InventionNoteRepository

logger = logging.getLogger(__name__)


def can_view(actor: User, note: InventionNote) -> bool:
    if actor.role in STAFF_ROLES:
        return True
    if actor.role == Role.STUDENT:
        return note.student_id == actor.id
    return actor.is_parent_of(note.student_id)


def can_edit(actor: User, note: InventionNote) -> bool:
    return actor.role == Role.STUDENT and note.student_id == actor.id


class InventionNoteService:
    """Use case: invention notebook.

    Students write their own notes, parents read their children's, staff
    read everything.
    """

    def __init__(
        self,
        notes: InventionNoteRepository,
        *,
        canvas_width: int = CANVAS_WIDTH,
        canvas_height: int = CANVAS_HEIGHT,
    ):
        self._notes = notes
        self._canvas = (int(canvas_width), int(canvas_height))

    def list_for(self, actor: User) -> List[InventionNote]:
        return [n for n in self._notes.list_all() if can_view(actor, n)]

    def get(self, actor: User, note_id: str) -> InventionNote:
        note = self._notes.get_by_id(note_id)
        if not note:
            raise NotFoundError("発明ノートが見つかりません")
        if not can_view(actor, note):
            raise AuthorizationError("この発明ノートを閲覧する権限がありません")
        return note

    def save(
        self,
        actor: User,
        note_id: Optional[str] = None,
        *,
        title: str,
        description: str = "",
        materials: str = "",
        dimensions: str = "",
        drawing: Optional[DrawingLog] = None,
        now: datetime | None = None,
    ) -> InventionNote:
        """Create (``note_id`` None) or update a note owned by ``actor``."""

        require_role(actor, {Role.STUDENT}, "発明ノートを編集できるのは生徒のみです")
        title = (title or "").strip()
        if not title:
            raise ValidationError("タイトルは必須です")

        today = today_iso(now)
        elements = (drawing or DrawingLog()).elements

        if note_id is None:
            note = InventionNote(
                id=new_id(),
                student_id=actor.id,
                student_name=actor.name,
                title=title,
                description=description or "",
                materials=materials or "",
                dimensions=dimensions or "",
                drawing=elements,
                created_at=today,
                updated_at=today,
            )
            self._notes.add(note)
            logger.info("Invention note %s created by %s", note.id, actor.id)
            return note

        current = self._notes.get_by_id(note_id)
        if not current:
            raise NotFoundError("発明ノートが見つかりません")
        if not can_edit(actor, current):
            raise AuthorizationError("他の生徒の発明ノートは編集できません")

        updated = replace(
            current,
            title=title,
            description=description or "",
            materials=materials or "",
            dimensions=dimensions or "",
            drawing=elements,
            updated_at=today,
            unparsed_drawing=None,
        )
        self._notes.update(updated)
        return updated

    def delete(self, actor: User, note_id: str) -> None:
        note = self._notes.get_by_id(note_id)
        if not note:
            raise NotFoundError("発明ノートが見つかりません")
        if not can_edit(actor, note):
            raise AuthorizationError("この発明ノートを削除する権限がありません")
        self._notes.delete_by_id(note_id)

    def render(self, actor: User, note_id: str) -> bytes:
        """PNG of the note's drawing replayed on a blank canvas."""

        note = self.get(actor, note_id)
        width, height = self._canvas
        return render_png(note.drawing, width=width, height=height)
