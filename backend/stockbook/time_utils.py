from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo


def utcnow() -> datetime:
    """Server-side 'now' in UTC (naive, canonical)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def shop_today(tz_name: str) -> date:
    """Current calendar date in the shop's timezone."""
    return datetime.now(ZoneInfo(tz_name)).date()


def sale_date_window(tz_name: str) -> tuple[date, date]:
    """Inclusive (yesterday, today) range a sale may be recorded against."""
    today = shop_today(tz_name)
    return today - timedelta(days=1), today


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a "YYYY-MM-DD" calendar date.

    - None / "" -> None
    - anything else must be a plain date; times and offsets are rejected
    """
    if value is None:
        return None
    s = value.strip()
    if not s:
        return None
    return date.fromisoformat(s)


def to_utc_z(dt: Optional[datetime]) -> Optional[str]:
    """
    Serializes datetime to ISO-8601 with trailing 'Z'.
    If dt is naive, it is treated as UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt_utc = dt.astimezone(timezone.utc).replace(microsecond=0)
    return dt_utc.isoformat().replace("+00:00", "Z")
