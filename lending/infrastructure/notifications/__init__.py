from .kafka_event_publisher import KafkaEventPublisher

__all__ = ["KafkaEventPublisher"]
