from __future__ import annotations

import io
import json

from flask import Flask, send_file

from ..common.web import current_user, json_body, make_guards, ok
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError
from .drawing.log import DrawingLog


def _drawing_from(value) -> DrawingLog:
    """Accept the element array, or the same array JSON-encoded as a string."""

    if value is None or value == "":
        return DrawingLog()
    try:
        if isinstance(value, str):
            value = json.loads(value)
        return DrawingLog.from_payload(value)
    except (KeyError, TypeError, ValueError):
        raise ValidationError("設計図のデータが正しくありません")


def register(app: Flask, container: Container) -> None:
    login_required, roles_required = make_guards(container.users_repo)
    notes = container.note_service

    def _save(note_id):
        data = json_body()
        return notes.save(
            current_user(),
            note_id,
            title=data.get("title", ""),
            description=data.get("description", ""),
            materials=data.get("materials", ""),
            dimensions=data.get("dimensions", ""),
            drawing=_drawing_from(data.get("drawing")),
        )

    @app.route("/api/notes", endpoint="api_notes")
    @login_required
    def api_notes():
        items = notes.list_for(current_user())
        return ok(notes=[n.to_view(include_drawing=False) for n in items])

    @app.route("/api/notes/<note_id>", endpoint="api_note_detail")
    @login_required
    def api_note_detail(note_id: str):
        return ok(note=notes.get(current_user(), note_id).to_view())

    @app.route("/api/notes/<note_id>/drawing.png", endpoint="api_note_drawing")
    @login_required
    def api_note_drawing(note_id: str):
        png = notes.render(current_user(), note_id)
        return send_file(io.BytesIO(png), mimetype="image/png")

    @app.route("/api/notes", methods=["POST"], endpoint="api_note_create")
    @roles_required({Role.STUDENT}, "発明ノートを編集できるのは生徒のみです")
    def api_note_create():
        return ok(201, note=_save(None).to_view())

    @app.route("/api/notes/<note_id>", methods=["PUT"], endpoint="api_note_update")
    @roles_required({Role.STUDENT}, "発明ノートを編集できるのは生徒のみです")
    def api_note_update(note_id: str):
        return ok(note=_save(note_id).to_view())

    @app.route("/api/notes/<note_id>", methods=["DELETE"], endpoint="api_note_delete")
    @roles_required({Role.STUDENT}, "発明ノートを編集できるのは生徒のみです")
    def api_note_delete(note_id: str):
        notes.delete(current_user(), note_id)
        return ok()
