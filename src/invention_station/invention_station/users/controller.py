from __future__ import annotations

import logging

from flask import Flask, session

from ..common.web import current_user, json_body, make_guards, ok
from ..container import Container
from ..core.enums import Role

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    login_required, roles_required = make_guards(container.users_repo)
    accounts = container.account_service

    @app.route("/api/login", methods=["POST"], endpoint="api_login")
    def api_login():
        data = json_body()
        user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))

        session.clear()
        session.permanent = True
        session["user_id"] = user.id
        session["name"] = user.name
        session["role"] = user.role.value
        logger.info("User %s logged in", user.username)
        return ok(user=user.public_view())

    @app.route("/api/logout", methods=["POST"], endpoint="api_logout")
    def api_logout():
        session.clear()
        return ok()

    @app.route("/api/me", endpoint="api_me")
    @login_required
    def api_me():
        return ok(user=current_user().public_view())

    @app.route("/api/me/password", methods=["POST"], endpoint="api_change_password")
    @login_required
    def api_change_password():
        data = json_body()
        container.auth_service.change_password(
            user_id=current_user().id,
            current_password=data.get("current_password", ""),
            new_password=data.get("new_password", ""),
            confirm_password=data.get("confirm_password", ""),
        )
        return ok(message="パスワードを変更しました")

    @app.route("/api/accounts", endpoint="api_accounts")
    @roles_required({Role.ADMIN})
    def api_accounts():
        items = accounts.list_accounts(current_user())
        return ok(accounts=[u.public_view() for u in items])

    @app.route("/api/students", endpoint="api_students")
    @roles_required({Role.ADMIN, Role.INSTRUCTOR})
    def api_students():
        return ok(students=[u.public_view() for u in accounts.list_students()])

    @app.route("/api/accounts", methods=["POST"], endpoint="api_account_create")
    @roles_required({Role.ADMIN})
    def api_account_create():
        data = json_body()
        user = accounts.create_account(
            current_user(),
            username=data.get("username", ""),
            password=data.get("password", ""),
            name=data.get("name", ""),
            role=data.get("role", ""),
            children_ids=data.get("children_ids") or (),
            grade=data.get("grade"),
            classroom=data.get("classroom"),
        )
        return ok(201, account=user.public_view())

    @app.route("/api/accounts/<user_id>", methods=["PUT"], endpoint="api_account_update")
    @roles_required({Role.ADMIN})
    def api_account_update(user_id: str):
        data = json_body()
        user = accounts.update_account(
            current_user(),
            user_id,
            username=data.get("username", ""),
            password=data.get("password") or None,
            name=data.get("name", ""),
            role=data.get("role", ""),
            children_ids=data.get("children_ids") or (),
            grade=data.get("grade"),
            classroom=data.get("classroom"),
        )
        return ok(account=user.public_view())

    @app.route("/api/accounts/<user_id>", methods=["DELETE"], endpoint="api_account_delete")
    @roles_required({Role.ADMIN})
    def api_account_delete(user_id: str):
        accounts.delete_account(current_user(), user_id)
        return ok()

    @app.route("/api/accounts/bulk", methods=["POST"], endpoint="api_account_bulk")
    @roles_required({Role.ADMIN})
    def api_account_bulk():
        created = accounts.bulk_import(current_user(), json_body().get("text", ""))
        return ok(201, created=len(created), accounts=[u.public_view() for u in created])
