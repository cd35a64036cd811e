from __future__ import annotations

from functools import wraps

from flask import g, jsonify

from ..core.enums import Role


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        ctx = getattr(g, "session_ctx", None)
        if ctx is None or not ctx.is_authenticated:
            return jsonify({"success": False, "message": "Please sign in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def manager_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        ctx = getattr(g, "session_ctx", None)
        if ctx is None or not ctx.is_authenticated:
            return jsonify({"success": False, "message": "Please sign in to continue"}), 401

        if ctx.role != Role.MANAGER:
            return jsonify({"success": False, "message": "Manager access required"}), 403

        return view(*args, **kwargs)

    return wrapper
