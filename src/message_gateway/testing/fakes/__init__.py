"""Testing fakes – in-memory doubles for kernel ports."""
from message_gateway.testing.fakes.clock import FakeClock, FrozenClock
from message_gateway.testing.fakes.consumer import InMemoryEventConsumer
from message_gateway.testing.fakes.outbox import InMemoryOutboxRepository
from message_gateway.testing.fakes.publisher import InMemoryEventPublisher
from message_gateway.testing.fakes.store import InMemoryMessageStore

__all__ = [
    "FakeClock",
    "FrozenClock",
    "InMemoryEventConsumer",
    "InMemoryEventPublisher",
    "InMemoryMessageStore",
    "InMemoryOutboxRepository",
]
