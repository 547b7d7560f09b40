"""Application – MessageStatusReader."""
from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Any

from message_gateway.kernel.messaging import HistoryEntry, MessageStatus, MessageStore
from message_gateway.kernel.time import isoformat


@dataclasses.dataclass(frozen=True)
class StatusView:
    """Current status of a message plus its transition history.

    A missing message is a normal answer (``status=not_found``) rather than
    an error; only ``id`` and ``status`` are set in that case.
    """

    id: str
    status: MessageStatus
    correlation_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    history: tuple[HistoryEntry, ...] = ()

    @property
    def found(self) -> bool:
        return self.status is not MessageStatus.NOT_FOUND

    def to_dict(self) -> dict[str, Any]:
        if not self.found:
            return {"id": self.id, "status": self.status.value}
        return {
            "id": self.id,
            "correlation_id": self.correlation_id,
            "status": self.status.value,
            "created_at": isoformat(self.created_at) if self.created_at else None,
            "updated_at": isoformat(self.updated_at) if self.updated_at else None,
            "history": [
                {
                    "status": entry.status.value,
                    "service": entry.service_name,
                    "event_id": entry.event_id,
                    "error": entry.error_message,
                    "timestamp": isoformat(entry.created_at) if entry.created_at else None,
                }
                for entry in self.history
            ],
        }


class MessageStatusReader:
    """Read-only: never writes and never publishes."""

    def __init__(self, store: MessageStore) -> None:
        self._store = store

    async def get_status(self, idempotency_id: str) -> StatusView:
        record = await self._store.get(idempotency_id)
        if record is None:
            return StatusView(id=idempotency_id, status=MessageStatus.NOT_FOUND)
        history = await self._store.list_history(idempotency_id)
        return StatusView(
            id=record.idempotency_id,
            status=record.status,
            correlation_id=record.correlation_id,
            created_at=record.created_at,
            updated_at=record.updated_at,
            history=tuple(history),
        )


__all__ = ["MessageStatusReader", "StatusView"]
