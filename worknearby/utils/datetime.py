# worknearby/utils/datetime.py
from __future__ import annotations

from datetime import UTC, datetime


def utcnow() -> datetime:
    # DB columns are naive UTC
    return datetime.now(UTC).replace(tzinfo=None)


def as_utc_naive(dt: datetime | None) -> datetime | None:
    if dt is None:
        return None
    if dt.tzinfo is not None:
        return dt.astimezone(UTC).replace(tzinfo=None)
    return dt


def to_iso(dt: datetime | None) -> str | None:
    dt = as_utc_naive(dt)
    return dt.isoformat() if dt else None
