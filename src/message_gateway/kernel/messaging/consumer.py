"""Kernel messaging – EventConsumer port."""
from __future__ import annotations

import abc
import asyncio
from typing import Awaitable, Callable

from message_gateway.kernel.messaging.event import Event

type EventHandler = Callable[[Event], Awaitable[None]]


class EventConsumer(abc.ABC):
    """Port: consume events from a channel and hand them to a handler.

    A handler that raises sends the event to the channel's dead-letter
    destination; it is never retried in a loop.
    """

    transport: str = "abstract"

    @abc.abstractmethod
    async def subscribe(self, channel: str, handler: EventHandler) -> None:
        """Start consuming *channel* in the background."""
        ...

    async def join(self) -> None:
        """Block while every consume loop is alive.

        Raises :class:`ConsumeError` once a loop stops on its own. Consumers
        whose delivery is driven by the client library's callbacks have no
        loop to watch and block until cancelled.
        """
        await asyncio.get_running_loop().create_future()

    @abc.abstractmethod
    async def close(self) -> None:
        """Stop every consume loop and release connections."""
        ...


__all__ = ["EventConsumer", "EventHandler"]
