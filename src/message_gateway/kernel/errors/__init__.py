"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   └── ValidationError
    ├── ApplicationError         (application.py)
    │   ├── LifecycleError
    │   └── ConfigError          (message_gateway.config.validation)
    └── InfrastructureError      (infrastructure.py)
        ├── StorageError
        ├── PublishError
        │   └── BrokerUnavailableError
        └── ConsumeError
"""

from message_gateway.kernel.errors.application import ApplicationError, LifecycleError
from message_gateway.kernel.errors.base import BaseError
from message_gateway.kernel.errors.domain import DomainError, ValidationError
from message_gateway.kernel.errors.infrastructure import (
    BrokerUnavailableError,
    ConsumeError,
    InfrastructureError,
    PublishError,
    StorageError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "BrokerUnavailableError",
    "ConsumeError",
    "DomainError",
    "InfrastructureError",
    "LifecycleError",
    "PublishError",
    "StorageError",
    "ValidationError",
]
