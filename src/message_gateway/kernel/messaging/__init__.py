"""Kernel messaging – event contract, publisher/consumer, store and outbox (ports only)."""
from message_gateway.kernel.messaging.event import (
    HEADER_CORRELATION_ID,
    HEADER_EVENT_TYPE,
    HEADER_IDEMPOTENCY_ID,
    MESSAGE_CREATED,
    MESSAGE_STATUS_UPDATED,
    Event,
)
from message_gateway.kernel.messaging.serializer import EventSerializer, JsonEventSerializer
from message_gateway.kernel.messaging.publisher import (
    DEAD_LETTER_SUFFIX,
    HEADER_ERROR,
    EventPublisher,
    PublisherState,
    dead_letter_channel,
)
from message_gateway.kernel.messaging.consumer import EventConsumer, EventHandler
from message_gateway.kernel.messaging.outbox import OutboxRecord, OutboxRepository, OutboxStatus
from message_gateway.kernel.messaging.store import (
    HistoryEntry,
    MessageRecord,
    MessageStatus,
    MessageStore,
)

__all__ = [
    "DEAD_LETTER_SUFFIX",
    "Event",
    "EventConsumer",
    "EventHandler",
    "EventPublisher",
    "EventSerializer",
    "HEADER_CORRELATION_ID",
    "HEADER_ERROR",
    "HEADER_EVENT_TYPE",
    "HEADER_IDEMPOTENCY_ID",
    "HistoryEntry",
    "JsonEventSerializer",
    "MESSAGE_CREATED",
    "MESSAGE_STATUS_UPDATED",
    "MessageRecord",
    "MessageStatus",
    "MessageStore",
    "OutboxRecord",
    "OutboxRepository",
    "OutboxStatus",
    "PublisherState",
    "dead_letter_channel",
]
