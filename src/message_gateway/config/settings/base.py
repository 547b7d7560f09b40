"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses
from typing import Any, ClassVar

_REDACTED = "***"


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings.

    Each dataclass field is read from ``<PREFIX>_<FIELD>`` (or ``<FIELD>``
    when the class has no prefix). Fields listed in ``_secret_fields`` are
    masked by :meth:`redacted` so the effective configuration can be logged.
    """

    _prefix: ClassVar[str] = ""
    _secret_fields: ClassVar[frozenset[str]] = frozenset()

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""

    @classmethod
    def required_fields(cls) -> frozenset[str]:
        return frozenset(
            f.name
            for f in dataclasses.fields(cls)
            if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING
        )

    @classmethod
    def env_key(cls, field_name: str) -> str:
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    def as_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in dataclasses.fields(self)}

    def redacted(self) -> dict[str, Any]:
        return {
            name: (_REDACTED if name in self._secret_fields and value else value)
            for name, value in self.as_dict().items()
        }


__all__ = ["Settings"]
