"""Flask helpers shared by the controllers: session guards and JSON envelopes."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Callable, Iterable, Optional

from flask import g, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    DuplicateActionError,
    NotFoundError,
    ValidationError,
)
from ..users.model import User
from ..users.repository import UserRepository

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (DuplicateActionError, 409),
)


def ok(status: int = 200, **payload):
    return jsonify({"success": True, **payload}), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def status_for(exc: DomainError) -> int:
    for kind, status in _STATUS_BY_ERROR:
        if isinstance(exc, kind):
            return status
    return 400


def domain_error_response(exc: DomainError):
    return fail(str(exc), status_for(exc))


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def current_user() -> Optional[User]:
    return g.get("current_user")


def make_guards(users: UserRepository):
    """Build ``login_required`` / ``roles_required`` bound to a user repository.

    The session only carries ``user_id``; the account is re-read on every
    request so deleted users lose access immediately.
    """

    def login_required(view: Callable):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user_id = session.get("user_id")
            if not user_id:
                return fail("ログインしてください", 401)
            user = users.get_by_id(str(user_id))
            if not user:
                session.clear()
                return fail("ログインしてください", 401)
            g.current_user = user
            return view(*args, **kwargs)

        return wrapper

    def roles_required(roles: Iterable[Role], message: str = "この操作を行う権限がありません"):
        allowed = frozenset(roles)

        def decorator(view: Callable):
            @wraps(view)
            @login_required
            def wrapper(*args, **kwargs):
                if g.current_user.role not in allowed:
                    return fail(message, 403)
                return view(*args, **kwargs)

            return wrapper

        return decorator

    return login_required, roles_required
