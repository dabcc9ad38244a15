from __future__ import annotations

from functools import wraps

from flask import g, jsonify, request

from ..core.exceptions import AuthenticationError
from .context import AuthContext
from .token_service import TokenService


def token_required(token_service: TokenService):
    """Resolve the bearer token into ``g.auth`` or answer 401."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            header = request.headers.get("Authorization", "")
            scheme, _, token = header.partition(" ")
            if scheme.lower() != "bearer" or not token.strip():
                return jsonify({"success": False, "message": "Authentication required"}), 401
            try:
                g.auth = token_service.resolve(token)
            except AuthenticationError as e:
                return jsonify({"success": False, "message": str(e)}), 401
            return view(*args, **kwargs)

        return wrapper

    return decorator


def current_auth() -> AuthContext:
    return g.auth
