"""Kernel time – Clock port, the wall clock and UTC rendering helpers.

Every timestamp the gateway stores or emits is timezone-aware UTC. Database
drivers that drop the offset (SQLite) hand back naive values; ``as_utc``
reads those as UTC.
"""
from __future__ import annotations

from datetime import UTC, datetime
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock used outside tests."""

    def now(self) -> datetime:
        return utc_now()


def utc_now() -> datetime:
    return datetime.now(UTC)


def as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def isoformat(moment: datetime) -> str:
    """``2026-01-01T12:00:00Z`` style rendering used in API bodies and events."""
    return as_utc(moment).isoformat().replace("+00:00", "Z")


__all__ = ["Clock", "SystemClock", "as_utc", "isoformat", "utc_now"]
