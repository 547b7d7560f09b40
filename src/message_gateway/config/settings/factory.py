"""Config settings – SettingsFactory."""
from __future__ import annotations

from typing import Any, Sequence, TypeVar

from message_gateway.config.settings.base import Settings
from message_gateway.config.settings.loaders import SettingsLoader
from message_gateway.config.validation.errors import ConfigError, MissingRequiredSettingError

T = TypeVar("T", bound=Settings)


class SettingsFactory:
    """Build one settings object from several sources.

    Sources are merged left to right, then *overrides* are applied on top.
    Any loader error aborts construction, so a process never starts on a
    configuration it could only partly read.
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> T:
        """Raises ``MissingRequiredSettingError``, ``InvalidSettingValueError`` or ``ConfigError``."""
        merged: dict[str, Any] = {}
        for loader in loaders or ():
            merged.update(loader.load(settings_cls).as_dict())
        merged.update(overrides or {})

        missing = sorted(settings_cls.required_fields() - merged.keys())
        if missing:
            raise MissingRequiredSettingError(settings_cls.env_key(missing[0]))

        try:
            return settings_cls(**merged)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to construct {settings_cls.__name__}: {exc}") from exc


__all__ = ["SettingsFactory"]
