"""Clock helpers shared by models and services."""

from __future__ import annotations

from datetime import UTC, date, datetime


def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def localnow() -> datetime:
    """Return the current time in the host's local timezone."""
    return datetime.now().astimezone()


def local_day(moment: datetime) -> date:
    """Calendar day of *moment* at the local midnight-to-midnight boundary."""
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone().date()
