"""Application – MessageIngestionService (idempotent record-then-publish)."""
from __future__ import annotations

import dataclasses
from typing import Any, Mapping

from message_gateway.config.settings import DeliveryMode
from message_gateway.kernel.errors import PublishError, StorageError, ValidationError
from message_gateway.kernel.messaging import (
    MESSAGE_CREATED,
    Event,
    EventPublisher,
    MessageStatus,
    MessageStore,
    OutboxRecord,
)
from message_gateway.kernel.types import CorrelationId, IdempotencyId
from message_gateway.observability.correlation import CorrelationContext
from message_gateway.observability.logging import get_logger

logger = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class CreatedMessage:
    """Identifiers handed back to the caller; ``id`` equals ``idempotency_id``."""

    id: str
    correlation_id: str
    idempotency_id: str
    status: MessageStatus = MessageStatus.PENDING

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "correlation_id": self.correlation_id,
            "idempotency_id": self.idempotency_id,
            "status": self.status.value,
        }


class MessageIngestionService:
    """Record a message under a fresh idempotency key, then announce it.

    In ``direct`` mode each call performs exactly one store write followed
    by one publish attempt. A store failure means nothing is published; a
    publish failure is raised even though the record stays ``pending``.
    In ``outbox`` mode the record and its event are written in one
    transaction and the outbox dispatcher publishes later.
    """

    def __init__(
        self,
        store: MessageStore,
        publisher: EventPublisher,
        *,
        source_service: str = "api-gateway",
        channel: str = MESSAGE_CREATED,
        delivery_mode: DeliveryMode = DeliveryMode.DIRECT,
    ) -> None:
        self._store = store
        self._publisher = publisher
        self._source_service = source_service
        self._channel = channel
        self._delivery_mode = delivery_mode

    @staticmethod
    def _validate(content: Any, metadata: Any) -> None:
        errors: list[dict[str, str]] = []
        if not isinstance(content, str) or not content:
            errors.append({"field": "content", "message": "must be a non-empty string"})
        if metadata is not None and not isinstance(metadata, Mapping):
            errors.append({"field": "metadata", "message": "must be an object"})
        if errors:
            raise ValidationError("Invalid message", errors=errors)

    async def create_message(self, content: str, metadata: Mapping[str, Any] | None = None) -> CreatedMessage:
        self._validate(content, metadata)

        correlation_id = str(CorrelationId.generate())
        idempotency_id = str(IdempotencyId.generate())
        # later log lines in this request carry the new id too
        CorrelationContext.set(CorrelationContext.get_or_new().with_idempotency_id(idempotency_id))
        payload = {"content": content, "metadata": dict(metadata or {})}
        log = logger.bind(correlation_id=correlation_id, idempotency_id=idempotency_id)
        log.info("message.creating", delivery_mode=self._delivery_mode.value)

        event = Event.create(
            MESSAGE_CREATED,
            correlation_id=correlation_id,
            idempotency_id=idempotency_id,
            source_service=self._source_service,
            payload=payload,
        )

        if self._delivery_mode is DeliveryMode.OUTBOX:
            try:
                await self._store.upsert_pending_with_outbox(
                    idempotency_id, correlation_id, payload, OutboxRecord.for_event(self._channel, event)
                )
            except StorageError as exc:
                log.error("message.store_failed", **exc.log_fields())
                raise
            log.info("message.created", event_id=event.event_id, outbox=True)
        else:
            try:
                await self._store.upsert_pending(idempotency_id, correlation_id, payload)
            except StorageError as exc:
                log.error("message.store_failed", **exc.log_fields())
                raise
            log.info("message.created")
            try:
                await self._publisher.publish(self._channel, event)
            except PublishError as exc:
                log.error(
                    "event.publish_failed", event_id=event.event_id, channel=self._channel, **exc.log_fields()
                )
                raise
            log.info("event.published", event_id=event.event_id, channel=self._channel)

        return CreatedMessage(id=idempotency_id, correlation_id=correlation_id, idempotency_id=idempotency_id)


__all__ = ["CreatedMessage", "MessageIngestionService"]
