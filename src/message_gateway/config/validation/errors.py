"""Config validation errors.

All of them abort startup: the gateway and the workers refuse to run on a
configuration they cannot fully interpret.
"""
from message_gateway.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """*setting_name* is the environment variable that was expected."""

    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(f"Required setting '{setting_name}' is missing", detail={"setting": setting_name})
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}",
            detail={"setting": setting_name, "reason": reason},
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


class UnsupportedTransportError(ConfigError):
    """``MESSAGE_BROKER`` names neither the log nor the queue transport."""

    default_code = "unsupported_transport"

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Unsupported message broker {name!r}; expected one of: log, kafka, queue, rabbit, rabbitmq",
            detail={"setting": "MESSAGE_BROKER", "value": name},
        )
        self.name = name


__all__ = [
    "ConfigError",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "UnsupportedTransportError",
]
