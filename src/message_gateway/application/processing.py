"""Application – MessageProcessor (downstream handler for ``message.created``)."""
from __future__ import annotations

from typing import Awaitable, Callable

from message_gateway.kernel.messaging import (
    MESSAGE_CREATED,
    MESSAGE_STATUS_UPDATED,
    Event,
    EventPublisher,
    MessageStatus,
    MessageStore,
)
from message_gateway.kernel.time import Clock, SystemClock, isoformat
from message_gateway.observability.correlation import CorrelationContext, RequestContext
from message_gateway.observability.logging import get_logger

logger = get_logger(__name__)

type MessageWork = Callable[[Event], Awaitable[None]]


async def _no_work(event: Event) -> None:  # noqa: ARG001
    return None


class MessageProcessor:
    """Moves a message ``pending → processing → completed`` and announces the result.

    Safe under redelivery: a record already past ``pending`` is skipped. If
    *work* raises, the record is marked ``failed`` with the error text and the
    exception propagates so the consumer dead-letters the event.
    """

    def __init__(
        self,
        store: MessageStore,
        publisher: EventPublisher,
        *,
        service_name: str = "message-processor",
        status_channel: str = MESSAGE_STATUS_UPDATED,
        work: MessageWork | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._store = store
        self._publisher = publisher
        self._service_name = service_name
        self._status_channel = status_channel
        self._work = work or _no_work
        self._clock = clock or SystemClock()

    async def handle(self, event: Event) -> bool:
        """Process *event*; returns ``False`` when it was skipped."""
        CorrelationContext.set(RequestContext(event.correlation_id).with_idempotency_id(event.idempotency_id))
        log = logger.bind(correlation_id=event.correlation_id, idempotency_id=event.idempotency_id)
        if event.event_type != MESSAGE_CREATED:
            log.warning("event.unexpected_type", event_type=event.event_type)
            return False

        # records events that reached the broker before (or without) the gateway write
        await self._store.upsert_pending(event.idempotency_id, event.correlation_id, dict(event.payload))
        record = await self._store.get(event.idempotency_id)
        if record is not None and record.status is not MessageStatus.PENDING:
            log.info("message.skipped", current_status=record.status.value)
            return False

        log.info("message.processing", event_id=event.event_id)
        await self._transition(event, MessageStatus.PROCESSING)
        try:
            await self._work(event)
        except Exception as exc:
            log.error("message.processing_failed", error=str(exc))
            await self._transition(event, MessageStatus.FAILED, error_message=str(exc))
            raise
        await self._transition(event, MessageStatus.COMPLETED)

        status_event = Event.create(
            MESSAGE_STATUS_UPDATED,
            correlation_id=event.correlation_id,
            idempotency_id=event.idempotency_id,
            source_service=self._service_name,
            payload={
                "idempotency_id": event.idempotency_id,
                "status": MessageStatus.COMPLETED.value,
                "processed_at": isoformat(self._clock.now()),
            },
        )
        await self._publisher.publish(self._status_channel, status_event)
        log.info("message.processed", status_event_id=status_event.event_id)
        return True

    async def _transition(self, event: Event, status: MessageStatus, error_message: str | None = None) -> None:
        await self._store.update_status(
            event.idempotency_id,
            event.correlation_id,
            status,
            self._service_name,
            event.event_id,
            error_message,
        )


__all__ = ["MessageProcessor", "MessageWork"]
