"""
List Open Loan Requests Use Case
================================

Open requests a resident can offer on: everything open in their
condominium except their own asks.
"""
from typing import List

from lending.domain.models.loan_request import LoanRequest
from lending.domain.repositories.loan_request_repository import LoanRequestRepository


class ListOpenLoanRequestsUseCase:
    """Use case for listing open loan requests."""
    
    def __init__(self, request_repository: LoanRequestRepository):
        self._repository = request_repository
    
    def execute(self, condo_id: str, excluding_requester_id: str) -> List[LoanRequest]:
        """Return open requests newest first; each call re-queries the store."""
        return self._repository.find_open_by_condo(condo_id, excluding_requester_id)
