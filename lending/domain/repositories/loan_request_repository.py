"""
Loan Request Repository Interface
=================================

Abstract interface for loan request data access operations.
Every method accepts an optional session so it can take part in a
unit of work.
"""
from abc import ABC, abstractmethod
from typing import Any, List, Optional
from lending.domain.models.loan_request import LoanRequest


class LoanRequestRepository(ABC):
    """Abstract repository interface for loan request operations."""
    
    @abstractmethod
    def create(self, request: LoanRequest, session: Optional[Any] = None) -> LoanRequest:
        """Create a new loan request."""
        pass
    
    @abstractmethod
    def find_by_id(self, request_id: str, session: Optional[Any] = None) -> Optional[LoanRequest]:
        """Find a loan request by its ID."""
        pass
    
    @abstractmethod
    def find_open_by_condo(self, condo_id: str, excluding_requester_id: str) -> List[LoanRequest]:
        """Find open requests in a condominium not authored by the given user, newest first."""
        pass
    
    @abstractmethod
    def transition_status(
        self,
        request_id: str,
        from_status: str,
        to_status: str,
        session: Optional[Any] = None,
    ) -> Optional[LoanRequest]:
        """
        Move a request from from_status to to_status atomically.
        
        Returns the updated request, or None if the request was not in
        from_status when the update ran.
        """
        pass
