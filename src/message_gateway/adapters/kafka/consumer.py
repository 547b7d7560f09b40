"""Kafka adapter – KafkaEventConsumer."""
from __future__ import annotations

import asyncio
from typing import Any

from message_gateway.kernel.errors import BrokerUnavailableError, ConsumeError, ValidationError
from message_gateway.kernel.messaging import (
    EventConsumer,
    EventHandler,
    EventPublisher,
    EventSerializer,
    JsonEventSerializer,
)
from message_gateway.observability.logging import get_logger

logger = get_logger(__name__)

_TASK_PREFIX = "kafka-consume:"


def _require_aiokafka() -> Any:
    try:
        import aiokafka  # type: ignore[import-untyped]
        return aiokafka
    except ImportError as exc:
        raise ImportError("Install 'aiokafka' to use the Kafka adapter") from exc


class KafkaEventConsumer(EventConsumer):
    """Consumer-group reader that commits after each handled record.

    A record whose handler raises is republished to ``<topic>.dlq`` through
    *dead_letter* and then committed, so one poison message never blocks
    the partition. If the dead-letter publish or the commit fails the loop
    stops without committing and :meth:`join` raises, so the worker exits and
    the record is redelivered.
    """

    transport = "log"

    def __init__(
        self,
        bootstrap_servers: str | list[str],
        group_id: str = "message-processor",
        dead_letter: EventPublisher | None = None,
        serializer: EventSerializer | None = None,
        **consumer_kwargs: Any,
    ) -> None:
        _require_aiokafka()
        self._bootstrap_servers = bootstrap_servers
        self._group_id = group_id
        self._dead_letter = dead_letter
        self._serializer = serializer or JsonEventSerializer()
        self._consumer_kwargs = consumer_kwargs
        self._consumers: list[Any] = []
        self._tasks: list[asyncio.Task[None]] = []

    async def subscribe(self, channel: str, handler: EventHandler) -> None:
        aiokafka = _require_aiokafka()
        options: dict[str, Any] = {"enable_auto_commit": False, "auto_offset_reset": "earliest"}
        options.update(self._consumer_kwargs)
        consumer = aiokafka.AIOKafkaConsumer(
            channel,
            bootstrap_servers=self._bootstrap_servers,
            group_id=self._group_id,
            **options,
        )
        try:
            await consumer.start()
        except Exception as exc:
            raise BrokerUnavailableError(self.transport, str(self._bootstrap_servers), cause=exc) from exc
        self._consumers.append(consumer)
        self._tasks.append(
            asyncio.create_task(self._consume(channel, consumer, handler), name=f"{_TASK_PREFIX}{channel}")
        )
        logger.info("kafka.subscribed", topic=channel, group_id=self._group_id)

    async def _consume(self, channel: str, consumer: Any, handler: EventHandler) -> None:
        try:
            async for record in consumer:
                await self.handle_record(channel, record.value, handler)
                await consumer.commit()
            logger.warning("kafka.consume_ended", topic=channel)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            # the uncommitted record is redelivered to the next group member
            logger.error("kafka.consume_stopped", topic=channel, error=repr(exc))
            raise

    async def join(self) -> None:
        if not self._tasks:
            await super().join()
            return
        done, _ = await asyncio.wait(self._tasks, return_when=asyncio.FIRST_COMPLETED)
        task = done.pop()
        if task.cancelled():
            return
        channel = task.get_name().removeprefix(_TASK_PREFIX)
        failure = task.exception()
        raise ConsumeError(channel, cause=failure) from failure

    async def handle_record(self, channel: str, body: bytes, handler: EventHandler) -> None:
        try:
            event = self._serializer.deserialize(body)
        except ValidationError as exc:
            logger.error("kafka.undecodable_record", topic=channel, error=exc.message)
            return
        try:
            await handler(event)
        except Exception as exc:
            logger.error(
                "kafka.handler_failed",
                topic=channel,
                event_id=event.event_id,
                idempotency_id=event.idempotency_id,
                error=repr(exc),
            )
            if self._dead_letter is not None:
                await self._dead_letter.publish_to_dead_letter(channel, event, str(exc))

    async def close(self) -> None:
        tasks, self._tasks = self._tasks, []
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        consumers, self._consumers = self._consumers, []
        for consumer in reversed(consumers):
            await consumer.stop()


__all__ = ["KafkaEventConsumer"]
