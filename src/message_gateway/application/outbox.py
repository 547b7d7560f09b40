"""Application – OutboxDispatcher."""
from __future__ import annotations

import asyncio
import contextlib

from message_gateway.kernel.errors import PublishError, StorageError, ValidationError
from message_gateway.kernel.messaging import EventPublisher, OutboxRepository
from message_gateway.observability.logging import get_logger

logger = get_logger(__name__)


class OutboxDispatcher:
    """Reads pending outbox records and publishes them through the broker publisher.

    A failed record is retried on later passes until ``max_attempts`` is
    reached, then parked as ``FAILED``. One failure never stops the batch.
    """

    def __init__(self, publisher: EventPublisher, repo: OutboxRepository, *, max_attempts: int = 5) -> None:
        self._publisher = publisher
        self._repo = repo
        self._max_attempts = max_attempts

    async def dispatch_pending(self, limit: int = 100) -> int:
        records = await self._repo.get_pending(limit)
        dispatched = 0
        for record in records:
            try:
                await self._publisher.publish(record.channel, record.to_event())
            except (PublishError, ValidationError) as exc:
                final = isinstance(exc, ValidationError) or record.attempts + 1 >= self._max_attempts
                logger.error(
                    "outbox.dispatch_failed",
                    record_id=record.id,
                    idempotency_id=record.idempotency_id,
                    attempts=record.attempts + 1,
                    final=final,
                    error=exc.message,
                )
                await self._repo.mark_failed(record.id, exc.message, final=final)
                continue
            await self._repo.mark_dispatched(record.id)
            dispatched += 1
        if records:
            logger.info("outbox.dispatched", dispatched=dispatched, batch=len(records))
        return dispatched

    async def run(self, interval: float, stop_event: asyncio.Event) -> None:
        """Poll every *interval* seconds until *stop_event* is set."""
        while not stop_event.is_set():
            try:
                await self.dispatch_pending()
            except StorageError as exc:
                # store outage: keep polling, rows stay PENDING
                logger.error("outbox.poll_failed", **exc.log_fields())
            with contextlib.suppress(asyncio.TimeoutError):
                await asyncio.wait_for(stop_event.wait(), timeout=interval)


__all__ = ["OutboxDispatcher"]
