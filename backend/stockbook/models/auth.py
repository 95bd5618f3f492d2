from __future__ import annotations

from ..extensions import db
from stockbook.time_utils import to_utc_z


ROLE_BOSS = "boss"
ROLE_WORKER = "worker"

THEMES = ("dark", "light")


class Profile(db.Model):
    """
    Account for one person using the shop.

    A boss owns an inventory tree. A worker is linked to exactly one boss
    (boss_id) and always sees that boss's tree, never one of its own.
    Role and boss linkage are fixed at sign-up.
    """
    __tablename__ = "profiles"
    __table_args__ = (
        db.CheckConstraint("role IN ('boss', 'worker')", name="ck_profiles_role"),
        db.CheckConstraint(
            "(role = 'worker' AND boss_id IS NOT NULL) OR (role = 'boss' AND boss_id IS NULL)",
            name="ck_profiles_boss_link",
        ),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)

    # Stored lower-cased; login is case-insensitive
    email = db.Column(db.String(255), nullable=False, unique=True)

    # Bcrypt hashed password
    password_hash = db.Column(db.String(255), nullable=False)

    role = db.Column(db.String(16), nullable=False)
    boss_id = db.Column(db.Integer, db.ForeignKey("profiles.id"), nullable=True, index=True)

    theme = db.Column(db.String(8), nullable=False, default="dark")

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    last_login_at = db.Column(db.DateTime(timezone=True), nullable=True)

    boss = db.relationship("Profile", remote_side=[id], backref=db.backref("workers", lazy=True))

    @property
    def is_boss(self) -> bool:
        return self.role == ROLE_BOSS

    @property
    def inventory_owner_id(self) -> int:
        """Profile id whose inventory this profile works on."""
        return self.id if self.is_boss else self.boss_id

    def __repr__(self) -> str:
        return f"<Profile id={self.id} email={self.email!r} role={self.role}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "role": self.role,
            "boss_id": self.boss_id,
            "theme": self.theme,
            "created_at": to_utc_z(self.created_at),
            "last_login_at": to_utc_z(self.last_login_at) if self.last_login_at else None,
        }


class SessionToken(db.Model):
    """
    Bearer session. Only the SHA-256 of the token is stored.
    """
    __tablename__ = "session_tokens"
    __table_args__ = (
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    profile_id = db.Column(db.Integer, db.ForeignKey("profiles.id"), nullable=False, index=True)

    token_hash = db.Column(db.String(64), nullable=False, unique=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False)
    last_used_at = db.Column(db.DateTime(timezone=True), nullable=False)
    expires_at = db.Column(db.DateTime(timezone=True), nullable=False)

    is_revoked = db.Column(db.Boolean, nullable=False, default=False)
    revoked_at = db.Column(db.DateTime(timezone=True), nullable=True)
    revoked_reason = db.Column(db.String(64), nullable=True)

    profile = db.relationship("Profile", backref=db.backref("sessions", lazy=True))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "profile_id": self.profile_id,
            "created_at": to_utc_z(self.created_at),
            "last_used_at": to_utc_z(self.last_used_at),
            "expires_at": to_utc_z(self.expires_at),
        }


class Invite(db.Model):
    """
    A boss's permission for an e-mail address to sign up as its worker.
    """
    __tablename__ = "invites"
    __table_args__ = (
        db.UniqueConstraint("boss_id", "worker_email", name="uq_invites_boss_email"),
        db.Index("ix_invites_worker_email", "worker_email"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    boss_id = db.Column(db.Integer, db.ForeignKey("profiles.id"), nullable=False, index=True)
    worker_email = db.Column(db.String(255), nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    accepted_at = db.Column(db.DateTime(timezone=True), nullable=True)
    accepted_profile_id = db.Column(db.Integer, db.ForeignKey("profiles.id"), nullable=True)

    boss = db.relationship("Profile", foreign_keys=[boss_id])

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "boss_id": self.boss_id,
            "worker_email": self.worker_email,
            "created_at": to_utc_z(self.created_at),
            "accepted_at": to_utc_z(self.accepted_at) if self.accepted_at else None,
            "accepted_profile_id": self.accepted_profile_id,
        }
