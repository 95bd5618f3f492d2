# Overview: Service-layer operations for worker invitations.

from __future__ import annotations

from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..models import Invite, Profile
from ..validation import ConflictError
from .auth_service import normalize_email


def invite_worker(boss: Profile, email: str) -> Invite:
    """
    Allow `email` to sign up as a worker of `boss`.

    The address is trimmed and lower-cased. Inviting the same address twice,
    or an address that already has an account, is a ConflictError.
    """
    worker_email = normalize_email(email)

    if db.session.query(Profile).filter_by(email=worker_email).first():
        raise ConflictError("This email already has an account")

    invite = Invite(boss_id=boss.id, worker_email=worker_email)
    db.session.add(invite)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError("This email has already been invited")
    return invite


def list_invites(boss: Profile) -> list[Invite]:
    return (
        db.session.query(Invite)
        .filter(Invite.boss_id == boss.id)
        .order_by(Invite.created_at.desc(), Invite.id.desc())
        .all()
    )
