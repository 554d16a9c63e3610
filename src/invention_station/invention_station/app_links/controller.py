from __future__ import annotations

from flask import Flask

from ..common.web import current_user, json_body, make_guards, ok
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    login_required, roles_required = make_guards(container.users_repo)
    links = container.app_link_service

    def _fields(data: dict) -> dict:
        return dict(
            title=data.get("title", ""),
            url=data.get("url", ""),
            icon=data.get("icon"),
            description=data.get("description", ""),
            category=data.get("category"),
        )

    @app.route("/api/app-links", endpoint="api_app_links")
    @login_required
    def api_app_links():
        return ok(links=[link.to_view() for link in links.list_all()])

    @app.route("/api/app-links", methods=["POST"], endpoint="api_app_link_create")
    @roles_required({Role.ADMIN})
    def api_app_link_create():
        link = links.create(current_user(), **_fields(json_body()))
        return ok(201, link=link.to_view())

    @app.route("/api/app-links/<link_id>", methods=["PUT"], endpoint="api_app_link_update")
    @roles_required({Role.ADMIN})
    def api_app_link_update(link_id: str):
        link = links.update(current_user(), link_id, **_fields(json_body()))
        return ok(link=link.to_view())

    @app.route("/api/app-links/<link_id>", methods=["DELETE"], endpoint="api_app_link_delete")
    @roles_required({Role.ADMIN})
    def api_app_link_delete(link_id: str):
        links.delete(current_user(), link_id)
        return ok()
