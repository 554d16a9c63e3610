from __future__ import annotations

from flask import Flask, request

from ..common.web import current_user, json_body, make_guards, ok
from ..container import Container
from ..core.enums import STAFF_ROLES


def register(app: Flask, container: Container) -> None:
    login_required, roles_required = make_guards(container.users_repo)
    materials = container.material_service

    @app.route("/api/materials", endpoint="api_materials")
    @login_required
    def api_materials():
        items = materials.list_visible(current_user(), category=request.args.get("category", "all"))
        return ok(materials=[m.to_view() for m in items], categories=materials.categories())

    @app.route("/api/materials/<material_id>", endpoint="api_material_detail")
    @login_required
    def api_material_detail(material_id: str):
        return ok(material=materials.get(current_user(), material_id).to_view())

    @app.route("/api/materials", methods=["POST"], endpoint="api_material_create")
    @roles_required(STAFF_ROLES)
    def api_material_create():
        data = json_body()
        material = materials.create(
            current_user(),
            title=data.get("title", ""),
            description=data.get("description", ""),
            category=data.get("category", ""),
            target_audience=data.get("target_audience") or (),
            file_url=data.get("file_url"),
        )
        return ok(201, material=material.to_view())

    @app.route("/api/materials/<material_id>", methods=["PUT"], endpoint="api_material_update")
    @roles_required(STAFF_ROLES)
    def api_material_update(material_id: str):
        data = json_body()
        material = materials.update(
            current_user(),
            material_id,
            title=data.get("title", ""),
            description=data.get("description", ""),
            category=data.get("category", ""),
            target_audience=data.get("target_audience") or (),
            file_url=data.get("file_url"),
        )
        return ok(material=material.to_view())

    @app.route("/api/materials/<material_id>", methods=["DELETE"], endpoint="api_material_delete")
    @roles_required(STAFF_ROLES)
    def api_material_delete(material_id: str):
        materials.delete(current_user(), material_id)
        return ok()
