# Overview: Flask API routes for worker invitations.

from flask import Blueprint, request, jsonify, g

from ..decorators import require_auth, require_permission
from ..services import invite_service
from ..validation import ValidationError, ConflictError, json_object


invites_bp = Blueprint("invites", __name__, url_prefix="/api/invites")


@invites_bp.post("")
@require_auth
@require_permission("INVITE_WORKERS")
def invite_worker_route():
    """
    Invite an e-mail address to join as a worker.

    The invitee signs up normally; the pending invite makes them a worker
    of the inviting boss.
    """
    try:
        data = json_object(request.get_json(silent=True))
        invite = invite_service.invite_worker(g.current_profile, data.get("email"))
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except ConflictError as e:
        return jsonify({"error": str(e)}), 409
    return jsonify({
        "invite": invite.to_dict(),
        "message": f"Invitation recorded. {invite.worker_email} can now sign up as your worker.",
    }), 201


@invites_bp.get("")
@require_auth
@require_permission("INVITE_WORKERS")
def list_invites_route():
    invites = invite_service.list_invites(g.current_profile)
    return jsonify({"invites": [invite.to_dict() for invite in invites]}), 200
