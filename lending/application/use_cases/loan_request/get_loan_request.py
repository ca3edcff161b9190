"""
Get Loan Request Use Case
=========================

Fetch a request together with the offers made on it.
"""
from lending.domain.exceptions import NotFoundError
from lending.domain.models.loan_request import LoanRequest
from lending.domain.repositories.loan_offer_repository import LoanOfferRepository
from lending.domain.repositories.loan_request_repository import LoanRequestRepository


class GetLoanRequestUseCase:
    """Use case for loading a request with its ordered offers."""
    
    def __init__(self, request_repository: LoanRequestRepository, offer_repository: LoanOfferRepository):
        self._request_repository = request_repository
        self._offer_repository = offer_repository
    
    def execute(self, request_id: str, condo_id: str) -> LoanRequest:
        """
        Load a loan request and its offers (oldest first).
        
        Requests from another condominium are reported as missing.
        
        Raises:
            NotFoundError: If the request does not exist in the caller's condominium
        """
        request = self._request_repository.find_by_id(request_id)
        if not request or request.condo_id != condo_id:
            raise NotFoundError("Loan request", request_id)
        
        request.offers = self._offer_repository.find_by_request_id(request.id)
        return request
