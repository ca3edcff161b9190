"""
Cancel Loan Request Use Case
============================

The requester withdraws an open request; its pending offers are rejected.
"""
import logging
from typing import Tuple

from lending.domain.constants.loan_status import RequestStatus
from lending.domain.exceptions import NotFoundError, PermissionDeniedError, RequestClosedError
from lending.domain.models.loan_request import LoanRequest
from lending.domain.repositories.loan_offer_repository import LoanOfferRepository
from lending.domain.repositories.loan_request_repository import LoanRequestRepository
from lending.domain.repositories.unit_of_work import TransactionScope, UnitOfWork

logger = logging.getLogger(__name__)


class CancelLoanRequestUseCase:
    """Use case for cancelling a loan request."""
    
    def __init__(
        self,
        request_repository: LoanRequestRepository,
        offer_repository: LoanOfferRepository,
        unit_of_work: UnitOfWork,
    ):
        self._request_repository = request_repository
        self._offer_repository = offer_repository
        self._unit_of_work = unit_of_work
    
    def execute(self, request_id: str, acting_user_id: str) -> LoanRequest:
        """
        Cancel an open request.
        
        Raises:
            NotFoundError: If the request does not exist
            PermissionDeniedError: If the caller is not the requester
            RequestClosedError: If the request is no longer open
        """
        cancelled, rejected = self._unit_of_work.run(lambda scope: self._cancel(scope, request_id, acting_user_id))
        logger.info("Loan request %s cancelled, %d pending offers rejected", cancelled.id, rejected)
        return cancelled
    
    def _cancel(self, scope: TransactionScope, request_id: str, acting_user_id: str) -> Tuple[LoanRequest, int]:
        session = scope.session
        request = self._request_repository.find_by_id(request_id, session=session)
        if not request:
            raise NotFoundError("Loan request", request_id)
        if not request.is_requested_by(acting_user_id):
            raise PermissionDeniedError("Only the requester may cancel a loan request")
        
        # Conditional on 'open' so a concurrent agreement and a cancel cannot both win
        cancelled = self._request_repository.transition_status(
            request.id, RequestStatus.OPEN, RequestStatus.CANCELLED, session=session
        )
        if cancelled is None:
            raise RequestClosedError()
        scope.on_rollback(lambda: self._request_repository.transition_status(
            request.id, RequestStatus.CANCELLED, RequestStatus.OPEN
        ))
        
        rejected = self._offer_repository.reject_pending(request.id, session=session)
        return cancelled, rejected
