"""Identifier generation and string-based identifier value objects.

Identifiers are UUID v7 strings: random enough that concurrent callers never
need to coordinate, and time-ordered so primary-key indexes stay compact.
"""

from __future__ import annotations

import dataclasses

import uuid_utils

from message_gateway.kernel.errors.domain import ValidationError


def new_id() -> str:
    """Return a new collision-resistant identifier."""
    return str(uuid_utils.uuid7())


@dataclasses.dataclass(frozen=True, slots=True)
class _StrId:
    """Base for string-typed identifiers."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value:
            raise ValidationError(f"{type(self).__name__} must not be empty")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls):  # noqa: ANN206
        return cls(new_id())


@dataclasses.dataclass(frozen=True, slots=True)
class CorrelationId(_StrId):
    """Groups every record and event derived from one logical request."""


@dataclasses.dataclass(frozen=True, slots=True)
class IdempotencyId(_StrId):
    """Primary identity of a message record; also the log partition key."""


@dataclasses.dataclass(frozen=True, slots=True)
class EventId(_StrId):
    """Identifies a single published event."""


__all__ = [
    "CorrelationId",
    "EventId",
    "IdempotencyId",
    "new_id",
]
