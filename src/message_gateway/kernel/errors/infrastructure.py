"""Infrastructure errors – store and broker failures."""

from __future__ import annotations

from typing import Any

from message_gateway.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class StorageError(InfrastructureError):
    """The message store is unreachable or rejected a write."""

    default_code = "storage_error"

    def __init__(
        self,
        operation: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Message store operation '{operation}' failed", **kwargs)
        self.operation = operation
        self.detail.setdefault("operation", operation)


class PublishError(InfrastructureError):
    """The transport is not ready or the broker rejected a send."""

    default_code = "publish_error"

    def __init__(
        self,
        channel: str | None,
        message: str | None = None,
        *,
        transport: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Failed to publish to '{channel}'", **kwargs)
        self.channel = channel
        self.transport = transport
        if channel is not None:
            self.detail.setdefault("channel", channel)
        if transport is not None:
            self.detail.setdefault("transport", transport)


class BrokerUnavailableError(PublishError):
    """The configured broker could not be reached when connecting."""

    default_code = "broker_unavailable"

    def __init__(self, transport: str, endpoint: str, **kwargs: Any) -> None:
        super().__init__(
            None,
            f"Could not connect to {transport} broker at '{endpoint}'",
            transport=transport,
            **kwargs,
        )
        self.endpoint = endpoint
        self.detail.setdefault("endpoint", endpoint)


class ConsumeError(InfrastructureError):
    """A consume loop stopped while the worker still expected events from it."""

    default_code = "consume_error"

    def __init__(self, channel: str, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(message or f"Consuming from '{channel}' stopped", **kwargs)
        self.channel = channel
        self.detail.setdefault("channel", channel)


__all__ = [
    "BrokerUnavailableError",
    "ConsumeError",
    "InfrastructureError",
    "PublishError",
    "StorageError",
]
