"""Testing – in-memory doubles for the kernel ports."""
from message_gateway.testing.fakes import (
    FakeClock,
    FrozenClock,
    InMemoryEventConsumer,
    InMemoryEventPublisher,
    InMemoryMessageStore,
    InMemoryOutboxRepository,
)

__all__ = [
    "FakeClock",
    "FrozenClock",
    "InMemoryEventConsumer",
    "InMemoryEventPublisher",
    "InMemoryMessageStore",
    "InMemoryOutboxRepository",
]
