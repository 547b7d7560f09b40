"""Kernel messaging – message records, status history and the MessageStore port."""
from __future__ import annotations

import abc
import dataclasses
from datetime import datetime
from enum import Enum
from typing import Any

from message_gateway.kernel.messaging.outbox import OutboxRecord


class MessageStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    # query-time sentinel, never persisted
    NOT_FOUND = "not_found"


@dataclasses.dataclass(frozen=True)
class MessageRecord:
    """Persisted message, keyed by ``idempotency_id``."""

    idempotency_id: str
    correlation_id: str
    status: MessageStatus
    payload: dict[str, Any]
    created_at: datetime
    updated_at: datetime


@dataclasses.dataclass(frozen=True)
class HistoryEntry:
    """One append-only status transition.

    ``id`` is assigned by the store on insert; pass ``None`` when appending.
    ``created_at`` defaults to the store's clock when left ``None``.
    """

    idempotency_id: str
    correlation_id: str
    status: MessageStatus
    service_name: str
    event_id: str
    error_message: str | None = None
    created_at: datetime | None = None
    id: int | None = None


class MessageStore(abc.ABC):
    """Port: persistence for message records and their status history.

    Every method raises :class:`~message_gateway.kernel.errors.StorageError`
    when the backing store is unreachable or rejects the operation.
    """

    @abc.abstractmethod
    async def upsert_pending(
        self,
        idempotency_id: str,
        correlation_id: str,
        payload: dict[str, Any],
    ) -> None:
        """Create a ``pending`` record, or only refresh ``updated_at`` if the key exists.

        Must be a single atomic statement: concurrent callers using the same
        key never both insert.
        """
        ...

    @abc.abstractmethod
    async def get(self, idempotency_id: str) -> MessageRecord | None:
        """Return the record, or ``None`` when it does not exist."""
        ...

    @abc.abstractmethod
    async def append_history(self, entry: HistoryEntry) -> None: ...

    @abc.abstractmethod
    async def list_history(self, idempotency_id: str) -> list[HistoryEntry]:
        """Return entries for *idempotency_id* ascending by ``created_at``."""
        ...

    @abc.abstractmethod
    async def update_status(
        self,
        idempotency_id: str,
        correlation_id: str,
        status: MessageStatus,
        service_name: str,
        event_id: str,
        error_message: str | None = None,
    ) -> None:
        """Set the record's status and append the matching history entry atomically."""
        ...

    @abc.abstractmethod
    async def upsert_pending_with_outbox(
        self,
        idempotency_id: str,
        correlation_id: str,
        payload: dict[str, Any],
        outbox_record: OutboxRecord,
    ) -> None:
        """:meth:`upsert_pending` plus an outbox insert in the same transaction."""
        ...


__all__ = ["HistoryEntry", "MessageRecord", "MessageStatus", "MessageStore"]
