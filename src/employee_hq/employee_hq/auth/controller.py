from __future__ import annotations

from flask import Flask, g, jsonify, request, session

from ..container import Container
from ..core.enums import Role
from ..profiles.model import Profile
from .decorators import login_required
from .identity import SessionIdentityProvider
from .session_context import SessionContext


def profile_to_dict(p: Profile | None) -> dict | None:
    if p is None:
        return None
    return {
        "id": p.user_id,
        "employee_id": p.employee_id,
        "name": p.name,
        "department": p.department,
    }


def _me_payload(ctx: SessionContext) -> dict:
    return {
        "user": {"id": ctx.user.id, "email": ctx.user.email} if ctx.user else None,
        "profile": profile_to_dict(ctx.profile),
        "role": ctx.role.value if ctx.role else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.before_request
    def open_session_context():
        g.identity = SessionIdentityProvider(container.credentials_repo, session)
        g.session_ctx = SessionContext(g.identity, container.profiles_repo).init()

    @app.teardown_request
    def close_session_context(exc=None):
        ctx = g.pop("session_ctx", None)
        if ctx is not None:
            ctx.dispose()

    @app.route("/api/auth/signup", methods=["POST"], endpoint="signup")
    def signup():
        data = request.get_json(silent=True) or {}
        profiles = container.profile_service
        draft = profiles.prepare(
            employee_id=data.get("employee_id", ""),
            name=data.get("name", ""),
            department=data.get("department", ""),
        )
        g.identity.sign_up(
            data.get("email", ""),
            data.get("password", ""),
            on_created=lambda user: profiles.register(
                user_id=user.id,
                employee_id=draft.employee_id,
                name=draft.name,
                department=draft.department,
                role=Role.EMPLOYEE,
            ),
        )
        g.identity.sign_in(data.get("email", ""), data.get("password", ""))
        return jsonify({"success": True, **_me_payload(g.session_ctx)}), 201

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or {}
        session.permanent = bool(data.get("remember_me"))
        g.identity.sign_in(data.get("email", ""), data.get("password", ""))
        return jsonify({"success": True, **_me_payload(g.session_ctx)}), 200

    @app.route("/api/auth/refresh", methods=["POST"], endpoint="refresh")
    @login_required
    def refresh():
        g.identity.refresh()
        return jsonify({"success": True, **_me_payload(g.session_ctx)}), 200

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        g.identity.sign_out()
        session.clear()
        return jsonify({"success": True}), 200

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify({"success": True, **_me_payload(g.session_ctx)}), 200
