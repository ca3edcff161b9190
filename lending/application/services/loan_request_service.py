"""
Loan Request Service
====================

Application service that coordinates loan request and offer operations.
This service orchestrates multiple use cases.
"""
from typing import List, Optional

from lending.core.config import Settings
from lending.domain.events.event_publisher import EventPublisher
from lending.domain.models.loan_request import LoanOffer, LoanRequest
from lending.domain.repositories.loan_offer_repository import LoanOfferRepository
from lending.domain.repositories.loan_request_repository import LoanRequestRepository
from lending.domain.repositories.unit_of_work import UnitOfWork
from lending.application.use_cases.loan_request.create_loan_request import CreateLoanRequestUseCase
from lending.application.use_cases.loan_request.list_open_loan_requests import ListOpenLoanRequestsUseCase
from lending.application.use_cases.loan_request.get_loan_request import GetLoanRequestUseCase
from lending.application.use_cases.loan_request.cancel_loan_request import CancelLoanRequestUseCase
from lending.application.use_cases.loan_offer.create_loan_offer import CreateLoanOfferUseCase


class LoanRequestService:
    """
    Application service for loan requests and offers.
    
    Requests and offers are always scoped to the caller's condominium.
    """
    
    def __init__(
        self,
        request_repository: LoanRequestRepository,
        offer_repository: LoanOfferRepository,
        unit_of_work: UnitOfWork,
        event_publisher: EventPublisher,
        settings: Settings,
    ):
        self._create_use_case = CreateLoanRequestUseCase(request_repository, settings)
        self._list_open_use_case = ListOpenLoanRequestsUseCase(request_repository)
        self._get_use_case = GetLoanRequestUseCase(request_repository, offer_repository)
        self._cancel_use_case = CancelLoanRequestUseCase(request_repository, offer_repository, unit_of_work)
        self._create_offer_use_case = CreateLoanOfferUseCase(
            request_repository, offer_repository, event_publisher
        )
    
    def create_request(
        self,
        requester_id: str,
        condo_id: str,
        title: str,
        description: Optional[str] = None,
    ) -> LoanRequest:
        """Create an open loan request in the requester's condominium."""
        return self._create_use_case.execute(
            requester_id=requester_id,
            condo_id=condo_id,
            title=title,
            description=description,
        )
    
    def list_open_requests(self, condo_id: str, excluding_requester_id: str) -> List[LoanRequest]:
        """List open requests in a condominium, minus the caller's own."""
        return self._list_open_use_case.execute(condo_id, excluding_requester_id)
    
    def get_request_with_offers(self, request_id: str, condo_id: str) -> LoanRequest:
        """Get a request and its offers."""
        return self._get_use_case.execute(request_id, condo_id)
    
    def cancel_request(self, request_id: str, acting_user_id: str) -> LoanRequest:
        """Cancel an open request on behalf of its requester."""
        return self._cancel_use_case.execute(request_id, acting_user_id)
    
    def create_offer(self, request_id: str, offerer_id: str, condo_id: str) -> LoanOffer:
        """Offer to lend against a request."""
        return self._create_offer_use_case.execute(request_id, offerer_id, condo_id)
