# backend/stockbook/routes/system.py
"""
System health endpoint.

One request tells a deploy whether the database answers and how many
sessions are waiting for `flask sessions cleanup`.
"""

import time

from flask import Blueprint, current_app

from ..extensions import db
from ..models import Item, SessionToken
from stockbook.time_utils import utcnow

system_bp = Blueprint("system", __name__)


def _inventory_details() -> dict:
    return {"items": db.session.query(Item).count()}


def _session_details() -> dict:
    live = db.session.query(SessionToken).filter(SessionToken.is_revoked.is_(False))
    return {
        "active_sessions": live.count(),
        "expired_pending_cleanup": live.filter(SessionToken.expires_at < utcnow()).count(),
    }


def _run_check(name: str, collect) -> dict:
    started = time.perf_counter()
    try:
        result = {"status": "healthy", "details": collect()}
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Health check %s failed", name)
        result = {"status": "unhealthy", "error": f"{name} check failed"}
    result["latency_ms"] = round((time.perf_counter() - started) * 1000, 2)
    return result


@system_bp.get("/api/health")
def health():
    """200 when every check passes, 503 otherwise."""
    checks = {
        "database": _run_check("database", _inventory_details),
        "session_service": _run_check("session_service", _session_details),
    }
    healthy = all(check["status"] == "healthy" for check in checks.values())
    return {
        "status": "healthy" if healthy else "unhealthy",
        "timestamp": utcnow().isoformat() + "Z",
        "checks": checks,
    }, 200 if healthy else 503
