from .loan_events import LoanEvent, LoanEventType, offer_created, loan_formed, loan_closed
from .event_publisher import EventPublisher

__all__ = [
    "LoanEvent",
    "LoanEventType",
    "EventPublisher",
    "offer_created",
    "loan_formed",
    "loan_closed",
]
