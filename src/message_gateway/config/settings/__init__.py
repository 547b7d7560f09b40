"""Config settings – 12-factor env-based configuration."""
from __future__ import annotations

from typing import Any

from message_gateway.config.settings.base import Settings
from message_gateway.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from message_gateway.config.settings.factory import SettingsFactory
from message_gateway.config.settings.gateway import DeliveryMode, GatewaySettings, Transport


def load_settings(env_file: str | None = None, **overrides: Any) -> GatewaySettings:
    """Build :class:`GatewaySettings` from the environment (and *env_file* when given)."""
    loader: SettingsLoader = DotenvSettingsLoader(env_file) if env_file else EnvSettingsLoader()
    return SettingsFactory.create(GatewaySettings, [loader], overrides or None)


__all__ = [
    "DeliveryMode",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "GatewaySettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
    "Transport",
    "load_settings",
]
