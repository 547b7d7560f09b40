"""Testing fakes – a clock that only moves when told to."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

_EPOCH = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


class FrozenClock:
    """Satisfies the ``Clock`` port; ``advance`` moves it forward explicitly."""

    def __init__(self, start: datetime = _EPOCH) -> None:
        self._current = start

    def now(self) -> datetime:
        return self._current

    def advance(self, seconds: float = 0.0, **delta: float) -> datetime:
        self._current += timedelta(seconds=seconds, **delta)
        return self._current


def FakeClock() -> FrozenClock:
    """Clock pinned to 2026-01-01 12:00 UTC, the start used across the test suite."""
    return FrozenClock(_EPOCH)


__all__ = ["FakeClock", "FrozenClock"]
