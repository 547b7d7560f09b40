"""Kafka adapter – log-transport publisher and consumer."""
from message_gateway.adapters.kafka.producer import KafkaEventPublisher
from message_gateway.adapters.kafka.consumer import KafkaEventConsumer

__all__ = ["KafkaEventConsumer", "KafkaEventPublisher"]
