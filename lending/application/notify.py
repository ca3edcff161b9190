"""
Event notification helper
=========================

Hands committed changes to the notification/chat bridge.
"""
import logging

from lending.domain.events.event_publisher import EventPublisher
from lending.domain.events.loan_events import LoanEvent

logger = logging.getLogger(__name__)


def notify(publisher: EventPublisher, event: LoanEvent) -> None:
    """
    Publish an event after commit.
    
    The bridge is a downstream consumer: a failure here is logged and the
    already-committed operation still succeeds.
    """
    try:
        publisher.publish(event)
    except Exception:
        logger.exception("Failed to publish %s event", event.event_type)
