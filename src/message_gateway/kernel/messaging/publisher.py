"""Kernel messaging – EventPublisher port with an explicit lifecycle.

State machine::

    UNINITIALIZED -> CONNECTING -> READY -> CLOSED
                         |
                         +--(failure)--> UNINITIALIZED

``CLOSED`` is terminal. Concrete transports implement ``_open``, ``_release``
and ``_send``; the base class owns the state transitions so both variants
fail the same way when used outside ``READY``.
"""
from __future__ import annotations

import abc
import asyncio
import enum
from typing import Any

from message_gateway.kernel.errors import LifecycleError, PublishError, ValidationError
from message_gateway.kernel.messaging.event import Event
from message_gateway.kernel.messaging.serializer import EventSerializer, JsonEventSerializer

DEAD_LETTER_SUFFIX = ".dlq"
HEADER_ERROR = "error"


class PublisherState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    CONNECTING = "connecting"
    READY = "ready"
    CLOSED = "closed"


def dead_letter_channel(channel: str) -> str:
    return f"{channel}{DEAD_LETTER_SUFFIX}"


class EventPublisher(abc.ABC):
    """Port: deliver one event to one named channel, at least once."""

    transport: str = "abstract"

    def __init__(self, serializer: EventSerializer | None = None) -> None:
        self._serializer = serializer or JsonEventSerializer()
        self._state = PublisherState.UNINITIALIZED
        self._lifecycle_lock = asyncio.Lock()

    @property
    def state(self) -> PublisherState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is PublisherState.READY

    async def connect(self) -> None:
        """Open the transport; raises ``BrokerUnavailableError`` on failure."""
        async with self._lifecycle_lock:
            if self._state is PublisherState.READY:
                return
            if self._state is PublisherState.CLOSED:
                raise LifecycleError(f"{self.transport} publisher is closed and cannot reconnect")
            self._state = PublisherState.CONNECTING
            try:
                await self._open()
            except BaseException:
                await self._release()
                self._state = PublisherState.UNINITIALIZED
                raise
            self._state = PublisherState.READY

    async def close(self) -> None:
        """Release every held resource; a second call is a no-op."""
        async with self._lifecycle_lock:
            if self._state is PublisherState.CLOSED:
                return
            try:
                await self._release()
            finally:
                self._state = PublisherState.CLOSED

    async def publish(self, channel: str, event: Event) -> None:
        self._require_ready(channel)
        try:
            event.validate()
        except ValidationError as exc:
            raise PublishError(channel, "Refusing to publish an invalid event", transport=self.transport, cause=exc) from exc
        await self._send(channel, event, self._serializer.serialize(event), event.routing_headers())

    async def publish_to_dead_letter(self, channel: str, event: Event, error: str) -> None:
        """Republish *event* to ``<channel>.dlq`` with the failure reason attached."""
        target = dead_letter_channel(channel)
        self._require_ready(target)
        headers = {**event.routing_headers(), HEADER_ERROR: error}
        await self._send(target, event, self._serializer.serialize(event), headers)

    async def __aenter__(self) -> "EventPublisher":
        await self.connect()
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.close()

    def _require_ready(self, channel: str) -> None:
        if self._state is not PublisherState.READY:
            raise PublishError(
                channel,
                f"{self.transport} publisher is not connected (state={self._state.value})",
                transport=self.transport,
            )

    @abc.abstractmethod
    async def _open(self) -> None: ...

    @abc.abstractmethod
    async def _release(self) -> None: ...

    @abc.abstractmethod
    async def _send(self, channel: str, event: Event, body: bytes, headers: dict[str, str]) -> None: ...


__all__ = [
    "DEAD_LETTER_SUFFIX",
    "EventPublisher",
    "HEADER_ERROR",
    "PublisherState",
    "dead_letter_channel",
]
