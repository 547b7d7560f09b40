"""
message_gateway – idempotent message ingestion and event publication.

Import path convention::

    from message_gateway.kernel.errors import PublishError, StorageError
    from message_gateway.kernel.messaging import Event, EventPublisher, MessageStore
    from message_gateway.application.ingestion import MessageIngestionService
    from message_gateway.app import create_app
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
