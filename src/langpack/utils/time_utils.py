"""Time utility helpers."""

from __future__ import annotations

from datetime import date, datetime, timezone


def now_utc() -> datetime:
    """Return current timezone-aware UTC timestamp."""

    return datetime.now(timezone.utc)


def creation_date_string(today: date | None = None) -> str:
    """Return the manifest creation date (local calendar day) as YYYY-MM-DD."""

    return (today or date.today()).isoformat()
