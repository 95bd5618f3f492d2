# Overview: Service-layer operations for auth; encapsulates business logic and database work.

"""
Authentication Service

Sign-up decides the role: an e-mail with an outstanding invite becomes a
worker of the inviting boss, any other e-mail becomes a boss with its own
(empty) inventory.

SECURITY NOTES:
- Passwords hashed with bcrypt (cost factor 12)
- Minimum 8 characters, upper/lower/digit/special required
- Session tokens managed separately (see session_service.py)
"""

import re

import bcrypt

from ..extensions import db
from ..models import Profile, Invite, ROLE_BOSS, ROLE_WORKER
from ..models.auth import THEMES
from ..validation import ValidationError, ConflictError
from stockbook.time_utils import utcnow


EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class PasswordValidationError(ValidationError):
    """Raised when password doesn't meet strength requirements."""
    pass


def normalize_email(email: str | None) -> str:
    if email is not None and not isinstance(email, str):
        raise ValidationError("email must be a string")
    value = (email or "").strip().lower()
    if not value:
        raise ValidationError("email is required")
    if not EMAIL_RE.match(value):
        raise ValidationError("email is not a valid address")
    return value


def validate_password_strength(password: str) -> None:
    """
    Validate password meets strength requirements.

    Raises PasswordValidationError if requirements not met.
    """
    if len(password) < 8:
        raise PasswordValidationError("Password must be at least 8 characters long")

    if not re.search(r'[A-Z]', password):
        raise PasswordValidationError("Password must contain at least one uppercase letter")

    if not re.search(r'[a-z]', password):
        raise PasswordValidationError("Password must contain at least one lowercase letter")

    if not re.search(r'\d', password):
        raise PasswordValidationError("Password must contain at least one digit")

    if not re.search(r"[!@#$%^&*(),.'\":{}|<>_\-]", password):
        raise PasswordValidationError("Password must contain at least one special character")


def hash_password(password: str) -> str:
    """
    Hash password using bcrypt with cost factor 12.

    Password is validated for strength before hashing.
    """
    validate_password_strength(password)
    salt = bcrypt.gensalt(rounds=12)
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')  # Store as string in database


def verify_password(password: str, password_hash: str) -> bool:
    """Timing-safe bcrypt check. Malformed hashes never verify."""
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        return False


def find_pending_invite(email: str) -> Invite | None:
    """Oldest un-accepted invite for this e-mail, if any."""
    return (
        db.session.query(Invite)
        .filter(Invite.worker_email == email, Invite.accepted_at.is_(None))
        .order_by(Invite.created_at.asc(), Invite.id.asc())
        .first()
    )


def sign_up(email: str, password: str) -> Profile:
    """
    Register a new profile.

    Returns the created Profile. Raises ValidationError for bad input and
    ConflictError when the e-mail is already registered.
    """
    email = normalize_email(email)
    if not password:
        raise ValidationError("password is required")
    if not isinstance(password, str):
        raise ValidationError("password must be a string")

    existing = db.session.query(Profile).filter_by(email=email).first()
    if existing:
        raise ConflictError("An account with this email already exists")

    password_hash = hash_password(password)

    invite = find_pending_invite(email)
    if invite:
        profile = Profile(email=email, password_hash=password_hash, role=ROLE_WORKER, boss_id=invite.boss_id)
    else:
        profile = Profile(email=email, password_hash=password_hash, role=ROLE_BOSS)

    db.session.add(profile)
    db.session.flush()

    if invite:
        invite.accepted_at = utcnow()
        invite.accepted_profile_id = profile.id

    db.session.commit()
    return profile


def authenticate(email: str, password: str) -> Profile | None:
    """
    Authenticate with e-mail and password.

    Returns Profile if credentials valid, None otherwise.
    Updates last_login_at timestamp on successful authentication.
    """
    if not isinstance(email, str) or not isinstance(password, str):
        return None
    value = email.strip().lower()
    if not value or not password:
        return None

    profile = db.session.query(Profile).filter_by(email=value).first()
    if not profile:
        return None

    if verify_password(password, profile.password_hash):
        profile.last_login_at = utcnow()
        db.session.commit()
        return profile

    return None


def update_preferences(profile: Profile, *, theme: str | None) -> Profile:
    if theme is None:
        raise ValidationError("theme is required")
    if theme not in THEMES:
        raise ValidationError(f"theme must be one of: {', '.join(THEMES)}")
    profile.theme = theme
    db.session.commit()
    return profile
