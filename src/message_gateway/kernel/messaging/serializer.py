"""Kernel messaging – EventSerializer port and the JSON implementation."""
from __future__ import annotations

import abc
import json

from message_gateway.kernel.errors import ValidationError
from message_gateway.kernel.messaging.event import Event


class EventSerializer(abc.ABC):
    """Port: turn an :class:`Event` into broker bytes and back."""

    content_type: str = "application/octet-stream"

    @abc.abstractmethod
    def serialize(self, event: Event) -> bytes: ...

    @abc.abstractmethod
    def deserialize(self, data: bytes) -> Event: ...


class JsonEventSerializer(EventSerializer):
    """JSON body carrying every Event field; identical for both transports."""

    content_type = "application/json"

    def serialize(self, event: Event) -> bytes:
        return json.dumps(event.to_dict(), default=str, separators=(",", ":")).encode()

    def deserialize(self, data: bytes) -> Event:
        try:
            parsed = json.loads(data)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ValidationError("Event body is not valid JSON", cause=exc) from exc
        return Event.from_dict(parsed)


__all__ = ["EventSerializer", "JsonEventSerializer"]
