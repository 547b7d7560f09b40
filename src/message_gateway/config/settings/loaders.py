"""Config settings – EnvSettingsLoader, DotenvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import os
from typing import Any, Callable, Mapping, TypeVar

from dotenv import load_dotenv

from message_gateway.config.settings.base import Settings
from message_gateway.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

T = TypeVar("T", bound=Settings)

_BOOLEANS = {"1": True, "true": True, "yes": True, "on": True, "0": False, "false": False, "no": False, "off": False}


def _parse_bool(raw: str) -> bool:
    try:
        return _BOOLEANS[raw.strip().lower()]
    except KeyError:
        raise ValueError("expected a boolean") from None


def _parse_list(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


# keyed by annotation text; fields are declared under ``from __future__ import annotations``
_PARSERS: dict[str, Callable[[str], Any]] = {
    "bool": _parse_bool,
    "int": int,
    "float": float,
}


def _hint_name(type_hint: Any) -> str:
    if isinstance(type_hint, str):
        return type_hint
    return getattr(type_hint, "__name__", str(type_hint))


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Load settings from environment variables.

    Each dataclass field reads ``Settings.env_key(field)``; unset variables
    keep the field default. *environ* replaces ``os.environ`` when given.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        required = settings_class.required_fields()
        values: dict[str, Any] = {}
        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            key = settings_class.env_key(field.name)
            if key in environ:
                values[field.name] = self._parse(key, environ[key], field.type)
            elif field.name in required:
                raise MissingRequiredSettingError(key)

        try:
            return settings_class(**values)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to load settings: {exc}") from exc

    @staticmethod
    def _parse(key: str, raw: str, type_hint: Any) -> Any:
        hint = _hint_name(type_hint)
        if hint.startswith("list") or getattr(type_hint, "__origin__", None) is list:
            return _parse_list(raw)
        parser = _PARSERS.get(hint)
        if parser is None:
            return raw
        try:
            return parser(raw)
        except ValueError as exc:
            raise InvalidSettingValueError(key, raw, f"expected {hint}") from exc


class DotenvSettingsLoader(SettingsLoader):
    """Read a ``.env`` file into the process environment, then load from it.

    Variables already set in the environment win unless *override* is true.
    """

    def __init__(self, env_file: str = ".env", override: bool = False) -> None:
        self._env_file = env_file
        self._override = override

    def load(self, settings_class: type[T]) -> T:
        load_dotenv(self._env_file, override=self._override)
        return EnvSettingsLoader().load(settings_class)


__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SettingsLoader"]
