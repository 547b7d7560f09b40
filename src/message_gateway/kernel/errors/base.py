"""Root error class for the message-gateway error hierarchy."""

from __future__ import annotations

import json
from typing import Any


class BaseError(Exception):
    """Root of the error hierarchy.

    Args:
        message: Human-readable description.
        code: Machine-readable slug, also the HTTP error ``code`` (defaults to ``default_code``).
        detail: Extra context; must stay JSON-serialisable because it is sent to clients.
        cause: Driver or client exception this error wraps.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = detail or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Client-facing body; the wrapped cause is included as its ``repr``."""
        body: dict[str, Any] = {"code": self.code, "message": self.message, "detail": self.detail}
        if self.cause is not None:
            body["cause"] = repr(self.cause)
        return body

    def log_fields(self) -> dict[str, Any]:
        """Flat key/values for a structlog call: ``logger.error("x", **exc.log_fields())``."""
        fields: dict[str, Any] = {"error_code": self.code, "error": self.message}
        if self.cause is not None:
            fields["cause"] = repr(self.cause)
        return fields


__all__ = ["BaseError"]
