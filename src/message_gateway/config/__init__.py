"""Config – environment-driven settings and their validation errors."""
from message_gateway.config.settings import (
    DeliveryMode,
    DotenvSettingsLoader,
    EnvSettingsLoader,
    GatewaySettings,
    Settings,
    SettingsFactory,
    SettingsLoader,
    Transport,
    load_settings,
)
from message_gateway.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
    UnsupportedTransportError,
)

__all__ = [
    "ConfigError",
    "DeliveryMode",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "GatewaySettings",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
    "Transport",
    "UnsupportedTransportError",
    "load_settings",
]
