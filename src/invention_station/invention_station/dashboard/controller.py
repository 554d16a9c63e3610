from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import now_local
from ..common.web import current_user, make_guards, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required, _ = make_guards(container.users_repo)

    @app.route("/api/dashboard", endpoint="api_dashboard")
    @login_required
    def api_dashboard():
        user = current_user()
        view = container.dashboard_service.overview(user, today=now_local().date())
        return ok(
            user=user.public_view(),
            role_label=view.role_label,
            access=view.access,
            material_count=view.material_count,
            recent_materials=[m.to_view() for m in view.recent_materials],
            upcoming_shifts=[s.to_view() for s in view.upcoming_shifts],
            recent_notices=[n.to_view() for n in view.recent_notices],
            user_count=view.user_count,
        )
