from typing import TYPE_CHECKING
from ...core.config import Settings
from ...domain.events.event_publisher import EventPublisher
from ...infrastructure.notifications.kafka_event_publisher import KafkaEventPublisher

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class NotificationProvider:
    """Notification provider - registers the event publisher for the chat/notification bridge"""
    
    @staticmethod
    def register(container: "BaseContainer") -> None:
        """Register the Kafka publisher unless a publisher was supplied."""
        if container.has(EventPublisher):
            return
        container.register_singleton(EventPublisher, KafkaEventPublisher(container.get(Settings)))
