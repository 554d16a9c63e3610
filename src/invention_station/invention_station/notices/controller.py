from __future__ import annotations

from flask import Flask, request

from ..common.web import current_user, json_body, make_guards, ok
from ..container import Container
from ..core.enums import STAFF_ROLES


def register(app: Flask, container: Container) -> None:
    login_required, roles_required = make_guards(container.users_repo)
    notices = container.notice_service

    @app.route("/api/notices", endpoint="api_notices")
    @login_required
    def api_notices():
        items = notices.list_visible(current_user(), priority=request.args.get("priority", "all"))
        return ok(notices=[n.to_view() for n in items])

    @app.route("/api/notices/<notice_id>", endpoint="api_notice_detail")
    @login_required
    def api_notice_detail(notice_id: str):
        return ok(notice=notices.get(current_user(), notice_id).to_view())

    @app.route("/api/notices", methods=["POST"], endpoint="api_notice_create")
    @roles_required(STAFF_ROLES)
    def api_notice_create():
        data = json_body()
        notice = notices.create(
            current_user(),
            title=data.get("title", ""),
            content=data.get("content", ""),
            target_audience=data.get("target_audience") or (),
            priority=data.get("priority"),
        )
        return ok(201, notice=notice.to_view())

    @app.route("/api/notices/<notice_id>", methods=["PUT"], endpoint="api_notice_update")
    @roles_required(STAFF_ROLES)
    def api_notice_update(notice_id: str):
        data = json_body()
        notice = notices.update(
            current_user(),
            notice_id,
            title=data.get("title", ""),
            content=data.get("content", ""),
            target_audience=data.get("target_audience") or (),
            priority=data.get("priority"),
        )
        return ok(notice=notice.to_view())

    @app.route("/api/notices/<notice_id>", methods=["DELETE"], endpoint="api_notice_delete")
    @roles_required(STAFF_ROLES)
    def api_notice_delete(notice_id: str):
        notices.delete(current_user(), notice_id)
        return ok()
