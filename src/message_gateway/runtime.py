"""Runtime – builds the publisher, store and services from settings and owns their lifecycle."""
from __future__ import annotations

from typing import Any

from message_gateway.adapters.kafka import KafkaEventConsumer, KafkaEventPublisher
from message_gateway.adapters.rabbitmq import RabbitMQEventConsumer, RabbitMQEventPublisher
from message_gateway.adapters.sqlalchemy import (
    SqlAlchemyMessageStore,
    SqlAlchemyOutboxRepository,
    SqlAlchemySessionFactory,
)
from message_gateway.application import (
    MessageIngestionService,
    MessageStatusReader,
    OutboxDispatcher,
)
from message_gateway.config.settings import GatewaySettings, Transport
from message_gateway.kernel.messaging import EventConsumer, EventPublisher, MessageStore, OutboxRepository
from message_gateway.observability.health import DatabaseHealthCheck, HealthRegistry, PublisherHealthCheck
from message_gateway.observability.logging import get_logger

logger = get_logger(__name__)


def create_publisher(settings: GatewaySettings) -> EventPublisher:
    """Pick the broker transport once; raises ``UnsupportedTransportError`` for unknown names."""
    transport = settings.transport
    if transport is Transport.LOG:
        return KafkaEventPublisher(settings.kafka_brokers, client_id=settings.kafka_client_id)
    return RabbitMQEventPublisher(settings.rabbitmq_url)


def create_consumer(settings: GatewaySettings, dead_letter: EventPublisher | None = None) -> EventConsumer:
    """Consumer for the configured transport.

    The log transport republishes failed records through *dead_letter*; the
    queue transport dead-letters through the broker and ignores it.
    """
    if settings.transport is Transport.LOG:
        return KafkaEventConsumer(
            settings.kafka_brokers,
            group_id=settings.kafka_group_id,
            dead_letter=dead_letter,
            client_id=settings.service_name,
        )
    return RabbitMQEventConsumer(settings.rabbitmq_url)


class Runtime:
    """Process-wide resources: one publisher, one store, one engine pool.

    Built once at startup and closed on shutdown; nothing here is a module
    level singleton. ``connect()`` fails fast when the broker is unreachable.
    """

    def __init__(
        self,
        settings: GatewaySettings,
        *,
        store: MessageStore,
        publisher: EventPublisher,
        outbox: OutboxRepository | None = None,
        session_factory: SqlAlchemySessionFactory | None = None,
    ) -> None:
        self.settings = settings
        self.store = store
        self.publisher = publisher
        self.outbox = outbox
        self._session_factory = session_factory
        self.ingestion = MessageIngestionService(
            store,
            publisher,
            source_service=settings.service_name,
            channel=settings.message_channel,
            delivery_mode=settings.delivery,
        )
        self.status_reader = MessageStatusReader(store)
        self.health = HealthRegistry()
        self.health.register(PublisherHealthCheck(publisher))
        if session_factory is not None:
            self.health.register(DatabaseHealthCheck(session_factory))

    @classmethod
    def from_settings(cls, settings: GatewaySettings, **engine_kwargs: Any) -> "Runtime":
        publisher = create_publisher(settings)
        engine_options: dict[str, Any] = {"pool_size": settings.database_pool_size, "pool_pre_ping": True}
        engine_options.update(engine_kwargs)
        session_factory = SqlAlchemySessionFactory(settings.dsn, **engine_options)
        return cls(
            settings,
            store=SqlAlchemyMessageStore(session_factory),
            publisher=publisher,
            outbox=SqlAlchemyOutboxRepository(session_factory),
            session_factory=session_factory,
        )

    def outbox_dispatcher(self) -> OutboxDispatcher:
        if self.outbox is None:
            raise RuntimeError("Runtime was built without an outbox repository")
        return OutboxDispatcher(self.publisher, self.outbox, max_attempts=self.settings.outbox_max_attempts)

    async def connect(self) -> None:
        await self.publisher.connect()
        logger.info(
            "runtime.started",
            transport=self.publisher.transport,
            delivery_mode=self.settings.delivery.value,
            settings=self.settings.redacted(),
        )

    async def close(self) -> None:
        try:
            await self.publisher.close()
        finally:
            if self._session_factory is not None:
                await self._session_factory.dispose()
        logger.info("runtime.stopped")

    async def __aenter__(self) -> "Runtime":
        try:
            await self.connect()
        except BaseException:
            await self.close()
            raise
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.close()


__all__ = ["Runtime", "create_consumer", "create_publisher"]
