"""Kafka adapter – KafkaEventPublisher (log transport)."""
from __future__ import annotations

from typing import Any

from message_gateway.kernel.errors import BrokerUnavailableError, PublishError
from message_gateway.kernel.messaging import Event, EventPublisher, EventSerializer
from message_gateway.observability.logging import get_logger

logger = get_logger(__name__)


def _require_aiokafka() -> Any:
    try:
        import aiokafka  # type: ignore[import-untyped]
        return aiokafka
    except ImportError as exc:
        raise ImportError("Install 'aiokafka' to use the Kafka adapter") from exc


class KafkaEventPublisher(EventPublisher):
    """aiokafka-backed publisher.

    Messages are keyed by ``idempotency_id`` so every event about one message
    lands on the same partition and keeps its relative order. The producer
    waits for all in-sync replicas and uses idempotent delivery.
    """

    transport = "log"

    def __init__(
        self,
        bootstrap_servers: str | list[str],
        client_id: str = "api-gateway",
        serializer: EventSerializer | None = None,
        **producer_kwargs: Any,
    ) -> None:
        _require_aiokafka()
        super().__init__(serializer)
        self._bootstrap_servers = bootstrap_servers
        self._client_id = client_id
        self._producer_kwargs = producer_kwargs
        self._producer: Any = None

    @property
    def endpoint(self) -> str:
        if isinstance(self._bootstrap_servers, str):
            return self._bootstrap_servers
        return ",".join(self._bootstrap_servers)

    @staticmethod
    def partition_key(event: Event) -> bytes:
        return event.idempotency_id.encode()

    async def _open(self) -> None:
        aiokafka = _require_aiokafka()
        options: dict[str, Any] = {"acks": "all", "enable_idempotence": True}
        options.update(self._producer_kwargs)
        self._producer = aiokafka.AIOKafkaProducer(
            bootstrap_servers=self._bootstrap_servers,
            client_id=self._client_id,
            **options,
        )
        try:
            await self._producer.start()
        except Exception as exc:
            logger.error("kafka.connect_failed", endpoint=self.endpoint, error=repr(exc))
            raise BrokerUnavailableError(self.transport, self.endpoint, cause=exc) from exc
        logger.info("kafka.producer_started", endpoint=self.endpoint, client_id=self._client_id)

    async def _release(self) -> None:
        producer, self._producer = self._producer, None
        if producer is not None:
            await producer.stop()
            logger.info("kafka.producer_stopped", endpoint=self.endpoint)

    async def _send(self, channel: str, event: Event, body: bytes, headers: dict[str, str]) -> None:
        try:
            await self._producer.send_and_wait(
                channel,
                value=body,
                key=self.partition_key(event),
                headers=[(k, v.encode()) for k, v in headers.items()],
            )
        except Exception as exc:
            logger.error(
                "kafka.publish_failed",
                topic=channel,
                event_id=event.event_id,
                idempotency_id=event.idempotency_id,
                error=repr(exc),
            )
            raise PublishError(channel, transport=self.transport, cause=exc) from exc
        logger.debug("kafka.published", topic=channel, event_id=event.event_id)


__all__ = ["KafkaEventPublisher"]
