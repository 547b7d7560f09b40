"""Testing fakes – InMemoryEventPublisher."""
from __future__ import annotations

from message_gateway.kernel.errors import BrokerUnavailableError, PublishError
from message_gateway.kernel.messaging import Event, EventPublisher


class InMemoryEventPublisher(EventPublisher):
    """Records published events instead of sending them.

    Goes through the real lifecycle, so publishing before ``connect()`` or
    after ``close()`` fails exactly like a broker-backed publisher. Set
    ``fail_with`` to make every send raise, or ``fail_on_connect`` to make
    ``connect()`` fail.
    """

    transport = "memory"

    def __init__(self) -> None:
        super().__init__()
        self.sent: list[tuple[str, Event, bytes, dict[str, str]]] = []
        self.fail_with: Exception | None = None
        self.fail_on_connect = False
        self.open_calls = 0
        self.release_calls = 0

    async def _open(self) -> None:
        self.open_calls += 1
        if self.fail_on_connect:
            raise BrokerUnavailableError(self.transport, "memory://")

    async def _release(self) -> None:
        self.release_calls += 1

    async def _send(self, channel: str, event: Event, body: bytes, headers: dict[str, str]) -> None:
        if self.fail_with is not None:
            raise PublishError(channel, transport=self.transport, cause=self.fail_with)
        self.sent.append((channel, event, body, headers))

    @property
    def published(self) -> list[Event]:
        return [event for _, event, _, _ in self.sent]

    def of_channel(self, channel: str) -> list[Event]:
        return [event for ch, event, _, _ in self.sent if ch == channel]

    def headers_for(self, event_id: str) -> dict[str, str]:
        for _, event, _, headers in self.sent:
            if event.event_id == event_id:
                return headers
        raise KeyError(event_id)

    def clear(self) -> None:
        self.sent.clear()


__all__ = ["InMemoryEventPublisher"]
