"""
Loan Offer Repository Interface
===============================

Abstract interface for loan offer data access operations.
"""
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence
from lending.domain.models.loan_request import LoanOffer


class LoanOfferRepository(ABC):
    """Abstract repository interface for loan offer operations."""
    
    @abstractmethod
    def create(self, offer: LoanOffer, session: Optional[Any] = None) -> LoanOffer:
        """Create a new offer."""
        pass
    
    @abstractmethod
    def find_by_id(self, offer_id: str, session: Optional[Any] = None) -> Optional[LoanOffer]:
        """Find an offer by its ID."""
        pass
    
    @abstractmethod
    def find_by_request_id(self, request_id: str, session: Optional[Any] = None) -> List[LoanOffer]:
        """Find all offers on a request, oldest first."""
        pass
    
    @abstractmethod
    def accept(self, offer_id: str, session: Optional[Any] = None) -> Optional[LoanOffer]:
        """Mark a pending offer accepted. Returns None if it was no longer pending."""
        pass
    
    @abstractmethod
    def reject_pending(
        self,
        request_id: str,
        except_offer_id: Optional[str] = None,
        session: Optional[Any] = None,
    ) -> int:
        """Reject every pending offer on a request (optionally sparing one). Returns the count."""
        pass
    
    @abstractmethod
    def restore_pending(self, offer_ids: Sequence[str], session: Optional[Any] = None) -> int:
        """Put settled offers back to pending. Returns the count."""
        pass
