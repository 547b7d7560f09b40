"""Application-layer errors – wiring and startup concerns."""

from __future__ import annotations

from message_gateway.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern (configuration, lifecycle)."""

    default_code = "application_error"


class LifecycleError(ApplicationError):
    """A resource was used outside of its open/ready/closed lifecycle."""

    default_code = "lifecycle_error"


__all__ = ["ApplicationError", "LifecycleError"]
