"""RabbitMQ adapter – queue-transport publisher and consumer."""
from message_gateway.adapters.rabbitmq.publisher import RabbitMQEventPublisher
from message_gateway.adapters.rabbitmq.consumer import DEAD_LETTER_EXCHANGE, RabbitMQEventConsumer

__all__ = ["DEAD_LETTER_EXCHANGE", "RabbitMQEventConsumer", "RabbitMQEventPublisher"]
