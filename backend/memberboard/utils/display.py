"""Presentation helpers shared by the HTML pages."""

from __future__ import annotations

from datetime import datetime, timezone

from ..schemas.memberships import CustomerProfile


def avatar_initial(name: str | None) -> str:
    """First character of the display name, ``?`` when there is none."""
    if not name:
        return "?"
    return name[0]


def avatar_url(customer: CustomerProfile | None) -> str | None:
    if customer is None:
        return None
    return customer.profile_pic_url_64 or None


def _parse_timestamp(value: str) -> datetime | None:
    raw = value.strip()
    if not raw:
        return None
    if raw.isdigit():
        seconds = int(raw)
        # millisecond epochs are 13 digits
        if seconds > 10**11:
            seconds //= 1000
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None


def format_joined_date(value: str | int | float | None) -> str:
    """Render an opaque API timestamp as ``M/D/YYYY``."""
    if value is None:
        return "Unknown"
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    parsed = _parse_timestamp(str(value))
    if parsed is None:
        return str(value)
    return f"{parsed.month}/{parsed.day}/{parsed.year}"


__all__ = ["avatar_initial", "avatar_url", "format_joined_date"]
