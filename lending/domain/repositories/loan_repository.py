"""
Loan Repository Interface
=========================

Abstract interface for loan data access operations.
Loans are never deleted.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence
from lending.domain.models.loan import Loan


class LoanRepository(ABC):
    """Abstract repository interface for loan operations."""
    
    @abstractmethod
    def create(self, loan: Loan, session: Optional[Any] = None) -> Loan:
        """Create a new loan."""
        pass
    
    @abstractmethod
    def find_by_id(self, loan_id: str, session: Optional[Any] = None) -> Optional[Loan]:
        """Find a loan by its ID."""
        pass
    
    @abstractmethod
    def find_by_request_id(self, request_id: str) -> List[Loan]:
        """Find loans formed from a request."""
        pass
    
    @abstractmethod
    def find_by_owner(self, owner_id: str) -> List[Loan]:
        """Find loans where the user is the lender, newest first."""
        pass
    
    @abstractmethod
    def find_by_borrower(self, borrower_id: str) -> List[Loan]:
        """Find loans where the user is the borrower, newest first."""
        pass
    
    @abstractmethod
    def transition(
        self,
        loan_id: str,
        from_statuses: Sequence[str],
        to_status: str,
        changes: Optional[Dict[str, Any]] = None,
        session: Optional[Any] = None,
    ) -> Optional[Loan]:
        """
        Conditionally move a loan to to_status and apply changes.
        
        The update only matches while the loan is in one of from_statuses.
        Returns the updated loan, or None if nothing matched.
        """
        pass
