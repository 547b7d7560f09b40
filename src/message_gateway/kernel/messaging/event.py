"""Kernel messaging – the Event contract shared by every service."""
from __future__ import annotations

import dataclasses
from typing import Any, Mapping

from message_gateway.kernel.errors import ValidationError
from message_gateway.kernel.time import isoformat, utc_now
from message_gateway.kernel.types import EventId

MESSAGE_CREATED = "message.created"
MESSAGE_STATUS_UPDATED = "message.status.updated"

HEADER_CORRELATION_ID = "correlation_id"
HEADER_IDEMPOTENCY_ID = "idempotency_id"
HEADER_EVENT_TYPE = "event_type"

_REQUIRED_FIELDS = (
    "event_id",
    "correlation_id",
    "idempotency_id",
    "event_type",
    "source_service",
    "timestamp",
)


@dataclasses.dataclass(frozen=True)
class Event:
    """Transport-agnostic domain event.

    The serialised body is the whole record; :meth:`routing_headers` exposes
    the subset brokers carry out-of-band so consumers can route or filter
    without decoding the body.
    """

    event_id: str
    correlation_id: str
    idempotency_id: str
    event_type: str
    source_service: str
    timestamp: str
    payload: dict[str, Any] = dataclasses.field(default_factory=dict)

    @classmethod
    def create(
        cls,
        event_type: str,
        correlation_id: str,
        idempotency_id: str,
        source_service: str,
        payload: Mapping[str, Any] | None = None,
        *,
        timestamp: str | None = None,
    ) -> "Event":
        """Build a new event with a fresh ``event_id`` and current UTC timestamp."""
        return cls(
            event_id=str(EventId.generate()),
            correlation_id=correlation_id,
            idempotency_id=idempotency_id,
            event_type=event_type,
            source_service=source_service,
            timestamp=timestamp or isoformat(utc_now()),
            payload=dict(payload or {}),
        )

    def validate(self) -> None:
        """Raise :class:`ValidationError` when an identifying field is empty."""
        errors = [
            {"field": name, "message": f"{name} is required"}
            for name in _REQUIRED_FIELDS
            if not getattr(self, name)
        ]
        if errors:
            raise ValidationError("Invalid event", errors=errors)

    def routing_headers(self) -> dict[str, str]:
        return {
            HEADER_CORRELATION_ID: self.correlation_id,
            HEADER_IDEMPOTENCY_ID: self.idempotency_id,
            HEADER_EVENT_TYPE: self.event_type,
        }

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Event":
        if not isinstance(data, Mapping):
            raise ValidationError("Event body must be a JSON object")
        missing = [name for name in _REQUIRED_FIELDS if name not in data]
        if missing:
            raise ValidationError(
                "Event body is missing required fields",
                errors=[{"field": name, "message": f"{name} is required"} for name in missing],
            )
        payload = data.get("payload") or {}
        if not isinstance(payload, Mapping):
            raise ValidationError.for_field("payload", "must be an object")
        return cls(
            event_id=str(data["event_id"]),
            correlation_id=str(data["correlation_id"]),
            idempotency_id=str(data["idempotency_id"]),
            event_type=str(data["event_type"]),
            source_service=str(data["source_service"]),
            timestamp=str(data["timestamp"]),
            payload=dict(payload),
        )


__all__ = [
    "Event",
    "HEADER_CORRELATION_ID",
    "HEADER_EVENT_TYPE",
    "HEADER_IDEMPOTENCY_ID",
    "MESSAGE_CREATED",
    "MESSAGE_STATUS_UPDATED",
]
