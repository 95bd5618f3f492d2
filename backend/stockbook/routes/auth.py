# Overview: Flask API routes for auth operations; parses input and returns JSON responses.

# backend/stockbook/routes/auth.py
"""
Authentication API routes

- Self sign-up: a new e-mail becomes a boss, an invited e-mail becomes
  that boss's worker
- Session management with token-based auth
- Per-profile theme preference
"""

from flask import Blueprint, request, jsonify, current_app, g

from ..services import auth_service
from ..services import session_service
from ..services import permission_service
from ..validation import ValidationError, ConflictError, json_object
from ..decorators import require_auth


auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


def _session_payload(profile, session, token, message):
    return {
        "profile": profile.to_dict(),
        "permissions": sorted(permission_service.get_profile_permissions(profile)),
        "token": token,
        "session": session.to_dict(),
        "message": message,
    }


@auth_bp.post("/signup")
def signup_route():
    """
    Create an account and sign it in.

    Returns 201 with profile, permissions and session token.
    """
    try:
        data = json_object(request.get_json(silent=True))
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    email = data.get("email")
    password = data.get("password")

    if not all([email, password]):
        return jsonify({"error": "email and password required"}), 400

    try:
        profile = auth_service.sign_up(email, password)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except ConflictError as e:
        return jsonify({"error": str(e)}), 409

    try:
        session, token = session_service.create_session(profile.id)
        current_app.logger.info("Profile %s signed up as %s", profile.id, profile.role)
        return jsonify(_session_payload(profile, session, token, "Sign-up successful")), 201
    except Exception:
        current_app.logger.exception("Failed to start session after sign-up")
        return jsonify({"error": "Internal server error"}), 500


@auth_bp.post("/login")
def login_route():
    """
    Authenticate and create a session token.

    Token must be sent as "Authorization: Bearer <token>" on protected routes.
    """
    try:
        data = json_object(request.get_json(silent=True))
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    try:
        email = data.get("email")
        password = data.get("password")

        if not all([email, password]):
            return jsonify({"error": "email and password required"}), 400

        profile = auth_service.authenticate(email, password)
        if not profile:
            current_app.logger.info("Failed login for %s", email)
            return jsonify({"error": "Invalid credentials"}), 401

        session, token = session_service.create_session(profile.id)
        return jsonify(_session_payload(profile, session, token, "Login successful")), 200

    except Exception:
        current_app.logger.exception("Failed to login profile")
        return jsonify({"error": "Internal server error"}), 500


@auth_bp.post("/logout")
@require_auth
def logout_route():
    """Revoke the session used for this request."""
    session_service.revoke_session(g.session_token, reason="User logout")
    return jsonify({"message": "Logged out"}), 200


@auth_bp.get("/session")
@require_auth
def session_route():
    """Current profile, permissions and session (re-reads the profile on every call)."""
    profile = g.current_profile
    return jsonify({
        "profile": profile.to_dict(),
        "permissions": sorted(permission_service.get_profile_permissions(profile)),
        "session": g.session_context.session.to_dict(),
    }), 200


@auth_bp.patch("/preferences")
@require_auth
def preferences_route():
    try:
        data = json_object(request.get_json(silent=True))
        profile = auth_service.update_preferences(g.current_profile, theme=data.get("theme"))
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify({"profile": profile.to_dict()}), 200
