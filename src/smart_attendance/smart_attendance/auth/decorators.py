from __future__ import annotations

from functools import wraps

from flask import g, request

from ..core.enums import Role
from .guard import AccessGuard


def role_required(guard: AccessGuard, role: Role):
    """Route decorator: authenticate the caller as ``role`` and expose it as ``g.actor``.

    Guard failures propagate as DomainError and are rendered by the app's
    error handler.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.actor = guard.authenticate(role, request.headers.get("Authorization"))
            return view(*args, **kwargs)

        return wrapper

    return decorator
