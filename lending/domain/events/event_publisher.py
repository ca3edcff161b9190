"""
Event Publisher Interface
=========================

Abstract interface for the notification/chat bridge.
"""
from abc import ABC, abstractmethod

from lending.domain.events.loan_events import LoanEvent


class EventPublisher(ABC):
    """
    Fire-and-forget sink for loan events.
    
    Implementations must not raise: a failed notification never affects
    the outcome of the operation that produced it.
    """
    
    @abstractmethod
    def publish(self, event: LoanEvent) -> None:
        """Publish an event to downstream consumers."""
        pass
