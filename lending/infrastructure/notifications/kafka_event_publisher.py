"""
Kafka Event Publisher
=====================

Publishes loan events to a Kafka topic for the notification/chat bridge.
Publishing happens after the originating change has committed and is
fire-and-forget: errors are logged and never reach the caller.
"""
import json
import logging
from datetime import date, datetime
from typing import Any, Optional

from kafka import KafkaProducer
from kafka.errors import KafkaError

from lending.core.config import Settings
from lending.domain.events.event_publisher import EventPublisher
from lending.domain.events.loan_events import LoanEvent
from lending.utils.datetime_utils import to_iso

logger = logging.getLogger(__name__)


def serialize_for_json(obj: Any) -> Any:
    """
    Recursively serialize objects for JSON encoding.
    Converts datetime and date objects to ISO format strings.
    """
    if isinstance(obj, datetime):
        return to_iso(obj)
    elif isinstance(obj, date):
        return obj.isoformat()
    elif isinstance(obj, dict):
        return {key: serialize_for_json(value) for key, value in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [serialize_for_json(item) for item in obj]
    else:
        return obj


class KafkaEventPublisher(EventPublisher):
    """
    Kafka implementation of EventPublisher.
    
    When Kafka is disabled in settings the events are only logged, which
    keeps local development free of a broker.
    """
    
    def __init__(self, settings: Settings):
        self._settings = settings
        self._producer: Optional[KafkaProducer] = None
    
    def _get_producer(self) -> Optional[KafkaProducer]:
        """Get or create the Kafka producer."""
        if self._producer is None:
            try:
                self._producer = KafkaProducer(
                    bootstrap_servers=self._settings.kafka_bootstrap_servers,
                    value_serializer=lambda v: json.dumps(v).encode("utf-8"),
                    key_serializer=lambda k: k.encode("utf-8") if k else None,
                    retries=3,
                    acks="all",
                    request_timeout_ms=30000,
                )
                logger.info("Kafka producer connected: %s", self._settings.kafka_bootstrap_servers)
            except KafkaError as e:
                logger.error("Failed to initialize Kafka producer: %s", e)
                return None
        return self._producer
    
    def publish(self, event: LoanEvent) -> None:
        message = serialize_for_json(event.to_dict())
        
        if not self._settings.kafka_enabled:
            logger.info("Loan event %s: %s", event.event_type, message)
            return
        
        producer = self._get_producer()
        if producer is None:
            logger.warning("Dropping loan event %s, no Kafka producer", event.event_type)
            return
        
        # Key by loan (or request) so one loan's events stay ordered in a partition
        key = message.get("loan_id") or message.get("loan_request_id")
        try:
            future = producer.send(self._settings.kafka_loan_events_topic, value=message, key=key)
            future.add_errback(
                lambda exc: logger.error("Kafka delivery failed for %s: %s", event.event_type, exc)
            )
        except KafkaError as e:
            logger.error("Failed to publish loan event %s: %s", event.event_type, e)
    
    def close(self) -> None:
        if self._producer is not None:
            self._producer.flush(timeout=5)
            self._producer.close()
            self._producer = None
