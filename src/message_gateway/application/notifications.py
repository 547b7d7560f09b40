"""Application – StatusNotifier (handler for ``message.status.updated``)."""
from __future__ import annotations

from typing import Awaitable, Callable

from message_gateway.kernel.messaging import Event
from message_gateway.observability.logging import get_logger

logger = get_logger(__name__)

type NotificationSender = Callable[[str, str, str], Awaitable[None]]


class StatusNotifier:
    """Relays status changes to *sender* (``(idempotency_id, correlation_id, status)``).

    Without a sender the notification is only logged. An event whose payload
    carries no string ``status`` is logged as a warning and ignored.
    """

    def __init__(self, sender: NotificationSender | None = None) -> None:
        self._sender = sender

    async def handle(self, event: Event) -> str | None:
        log = logger.bind(correlation_id=event.correlation_id, idempotency_id=event.idempotency_id)
        log.info("notification.received", event_id=event.event_id)
        status = event.payload.get("status")
        if not isinstance(status, str) or not status:
            log.warning("notification.status_missing", event_id=event.event_id)
            return None
        if self._sender is not None:
            await self._sender(event.idempotency_id, event.correlation_id, status)
        log.info("notification.sent", status=status)
        return status


__all__ = ["NotificationSender", "StatusNotifier"]
