"""Unit tests for the error hierarchy."""
from __future__ import annotations

import json

from message_gateway.config import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
    UnsupportedTransportError,
)
from message_gateway.kernel.errors import (
    ApplicationError,
    BaseError,
    BrokerUnavailableError,
    ConsumeError,
    DomainError,
    InfrastructureError,
    LifecycleError,
    PublishError,
    StorageError,
    ValidationError,
)


class TestHierarchy:
    def test_validation_is_domain_error(self) -> None:
        assert issubclass(ValidationError, DomainError)
        assert issubclass(DomainError, BaseError)

    def test_infrastructure_branch(self) -> None:
        assert issubclass(StorageError, InfrastructureError)
        assert issubclass(PublishError, InfrastructureError)
        assert issubclass(BrokerUnavailableError, PublishError)
        assert issubclass(ConsumeError, InfrastructureError)

    def test_config_branch(self) -> None:
        for cls in (MissingRequiredSettingError, InvalidSettingValueError, UnsupportedTransportError):
            assert issubclass(cls, ConfigError)
        assert issubclass(ConfigError, ApplicationError)
        assert issubclass(LifecycleError, ApplicationError)


class TestBaseError:
    def test_default_code(self) -> None:
        assert StorageError("get").code == "storage_error"
        assert PublishError("ch").code == "publish_error"

    def test_to_dict_contains_cause_repr(self) -> None:
        err = StorageError("upsert_pending", cause=ConnectionError("down"))
        data = err.to_dict()
        assert data["code"] == "storage_error"
        assert data["detail"] == {"operation": "upsert_pending"}
        assert "ConnectionError" in data["cause"]
        assert err.__cause__ is err.cause

    def test_str_is_json(self) -> None:
        err = PublishError("message.created", transport="log")
        parsed = json.loads(str(err))
        assert parsed["detail"] == {"channel": "message.created", "transport": "log"}

    def test_broker_unavailable_detail(self) -> None:
        err = BrokerUnavailableError("queue", "localhost:5672/")
        assert err.detail["endpoint"] == "localhost:5672/"
        assert err.channel is None
        assert "queue" in err.message

    def test_consume_error_detail(self) -> None:
        err = ConsumeError("message.created", cause=RuntimeError("rebalance"))
        assert err.code == "consume_error"
        assert err.detail["channel"] == "message.created"
        assert "message.created" in err.message

    def test_log_fields_are_flat(self) -> None:
        err = StorageError("get", cause=ConnectionError("down"))
        fields = err.log_fields()
        assert fields["error_code"] == "storage_error"
        assert fields["error"] == err.message
        assert "ConnectionError" in fields["cause"]

    def test_log_fields_omit_missing_cause(self) -> None:
        assert "cause" not in PublishError("message.created").log_fields()


class TestValidationError:
    def test_for_field(self) -> None:
        err = ValidationError.for_field("content", "must not be empty")
        assert err.errors == [{"field": "content", "message": "must not be empty"}]
        assert err.to_dict()["errors"] == err.errors

    def test_unsupported_transport_names_value(self) -> None:
        err = UnsupportedTransportError("nats")
        assert err.detail["value"] == "nats"
        assert err.code == "unsupported_transport"
