"""
List My Loans Use Case
======================

A user's loans split by role.
"""
from typing import Dict, List

from lending.domain.models.loan import Loan
from lending.domain.repositories.loan_repository import LoanRepository


class ListMyLoansUseCase:
    """Use case for listing the loans a user lent and borrowed."""
    
    def __init__(self, loan_repository: LoanRepository):
        self._repository = loan_repository
    
    def execute(self, user_id: str) -> Dict[str, List[Loan]]:
        return {
            "lent": self._repository.find_by_owner(user_id),
            "borrowed": self._repository.find_by_borrower(user_id),
        }
