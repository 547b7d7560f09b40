"""Kernel messaging – outbox pattern ports."""
from __future__ import annotations

import abc
import dataclasses
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from message_gateway.kernel.messaging.event import Event


class OutboxStatus(str, Enum):
    PENDING = "PENDING"
    DISPATCHED = "DISPATCHED"
    FAILED = "FAILED"


@dataclasses.dataclass
class OutboxRecord:
    """Event waiting to be dispatched, stored in the same transaction as its message."""

    id: str
    idempotency_id: str
    event_type: str
    channel: str
    payload: dict[str, Any]
    headers: dict[str, str] = dataclasses.field(default_factory=dict)
    status: OutboxStatus = OutboxStatus.PENDING
    attempts: int = 0
    last_error: str | None = None
    created_at: datetime = dataclasses.field(default_factory=lambda: datetime.now(UTC))
    dispatched_at: datetime | None = None

    @classmethod
    def for_event(cls, channel: str, event: Event) -> "OutboxRecord":
        return cls(
            id=event.event_id,
            idempotency_id=event.idempotency_id,
            event_type=event.event_type,
            channel=channel,
            payload=event.to_dict(),
            headers=event.routing_headers(),
        )

    def to_event(self) -> Event:
        return Event.from_dict(self.payload)


class OutboxRepository(abc.ABC):
    """Port: persistence for outbox records."""

    @abc.abstractmethod
    async def get_pending(self, limit: int = 100) -> list[OutboxRecord]:
        """Return at most *limit* ``PENDING`` records, oldest first."""
        ...

    @abc.abstractmethod
    async def mark_dispatched(self, record_id: str) -> None: ...

    @abc.abstractmethod
    async def mark_failed(self, record_id: str, error: str, *, final: bool) -> None:
        """Record a failed attempt; ``final`` moves the record to ``FAILED``."""
        ...


__all__ = ["OutboxRecord", "OutboxRepository", "OutboxStatus"]
