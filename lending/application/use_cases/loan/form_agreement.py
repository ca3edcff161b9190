"""
Form Agreement Use Case
=======================

Turns one pending offer into a binding Loan.

Within a single unit of work this creates the loan, accepts the chosen
offer, rejects every other pending offer on the request and marks the
request fulfilled. The request's conditional open -> fulfilled update is
the linearization point: of any number of concurrent formations on the
same request only one can make it, and the rest fail with
OfferUnavailableError. Without store transactions every write registers
its undo step, so a failure after the claim reopens the request and puts
its offers back to pending.
"""
import logging
from datetime import date
from typing import Tuple, Union

from lending.core.config import Settings
from lending.domain.constants.loan_status import LoanStatus, RequestStatus
from lending.domain.events.event_publisher import EventPublisher
from lending.domain.events.loan_events import loan_formed
from lending.domain.exceptions import (
    NotFoundError,
    OfferUnavailableError,
    PermissionDeniedError,
    ValidationError,
)
from lending.domain.models.loan import Loan
from lending.domain.repositories.loan_offer_repository import LoanOfferRepository
from lending.domain.repositories.loan_repository import LoanRepository
from lending.domain.repositories.loan_request_repository import LoanRequestRepository
from lending.domain.repositories.unit_of_work import TransactionScope, UnitOfWork
from lending.application.notify import notify
from lending.utils.datetime_utils import parse_date, today
from lending.utils.utils import clean_text, is_http_url, new_id

logger = logging.getLogger(__name__)


class FormAgreementUseCase:
    """Use case for accepting an offer and recording the loan agreement."""
    
    def __init__(
        self,
        request_repository: LoanRequestRepository,
        offer_repository: LoanOfferRepository,
        loan_repository: LoanRepository,
        unit_of_work: UnitOfWork,
        event_publisher: EventPublisher,
        settings: Settings,
    ):
        self._request_repository = request_repository
        self._offer_repository = offer_repository
        self._loan_repository = loan_repository
        self._unit_of_work = unit_of_work
        self._event_publisher = event_publisher
        self._settings = settings
    
    def execute(
        self,
        offer_id: str,
        acting_user_id: str,
        agreed_return_date: Union[str, date],
        digital_term: str,
        handover_photo_url: str,
    ) -> Loan:
        """
        Execute the form agreement use case.
        
        Args:
            offer_id: The offer being accepted
            acting_user_id: Must be the requester of the offer's request
            agreed_return_date: Date (or ISO string) the item is due back; today or later
            digital_term: Liability clause both parties agree to
            handover_photo_url: Photo of the item's condition at agreement time
            
        Returns:
            The new loan in status 'pending_handover'
            
        Raises:
            NotFoundError: If the offer does not exist
            PermissionDeniedError: If the caller is not the original requester
            OfferUnavailableError: If the offer or its request has already been settled
            ValidationError: If the return date, term or photo URL is invalid
        """
        loan, rejected = self._unit_of_work.run(
            lambda scope: self._form(
                scope, offer_id, acting_user_id, agreed_return_date, digital_term, handover_photo_url
            )
        )
        
        logger.info(
            "Loan %s formed from offer %s (owner=%s, borrower=%s, %d competing offers rejected)",
            loan.id, loan.offer_id, loan.owner_id, loan.borrower_id, rejected,
        )
        notify(self._event_publisher, loan_formed(loan))
        return loan

    def _form(
        self,
        scope: TransactionScope,
        offer_id: str,
        acting_user_id: str,
        agreed_return_date: Union[str, date],
        digital_term: str,
        handover_photo_url: str,
    ) -> Tuple[Loan, int]:
        session = scope.session

        # Preconditions are read inside the unit of work, never from an earlier read
        offer = self._offer_repository.find_by_id(offer_id, session=session)
        if not offer:
            raise NotFoundError("Loan offer", offer_id)

        request = self._request_repository.find_by_id(offer.loan_request_id, session=session)
        if not request:
            raise NotFoundError("Loan request", offer.loan_request_id)

        if not request.is_requested_by(acting_user_id):
            raise PermissionDeniedError("Only the original requester may accept an offer")

        if not offer.is_pending() or not request.is_open():
            raise OfferUnavailableError()

        return_date = self._validate_return_date(agreed_return_date)
        term = self._validate_digital_term(digital_term)
        photo_url = self._validate_photo_url(handover_photo_url)

        fulfilled = self._request_repository.transition_status(
            request.id, RequestStatus.OPEN, RequestStatus.FULFILLED, session=session
        )
        if fulfilled is None:
            logger.info("Lost agreement race on request %s (offer %s)", request.id, offer.id)
            raise OfferUnavailableError()
        scope.on_rollback(lambda: self._request_repository.transition_status(
            request.id, RequestStatus.FULFILLED, RequestStatus.OPEN
        ))

        if self._offer_repository.accept(offer.id, session=session) is None:
            raise OfferUnavailableError()

        competing = [
            o.id for o in self._offer_repository.find_by_request_id(request.id, session=session)
            if o.is_pending() and o.id != offer.id
        ]
        scope.on_rollback(lambda: self._offer_repository.restore_pending([offer.id] + competing))
        rejected = self._offer_repository.reject_pending(
            request.id, except_offer_id=offer.id, session=session
        )

        loan = Loan(
            id=new_id(),
            loan_request_id=request.id,
            offer_id=offer.id,
            owner_id=offer.offerer_id,
            borrower_id=request.requester_id,
            agreed_return_date=return_date,
            digital_term=term,
            handover_photo_url=photo_url,
            status=LoanStatus.PENDING_HANDOVER,
        )
        self._loan_repository.create(loan, session=session)
        return loan, rejected

    def _validate_return_date(self, value: Union[str, date]) -> date:
        return_date = value if isinstance(value, date) else parse_date(value)
        if return_date is None:
            raise ValidationError("agreedReturnDate must be a valid date (YYYY-MM-DD)")
        if return_date < today():
            raise ValidationError("agreedReturnDate cannot be in the past")
        return return_date
    
    def _validate_digital_term(self, value: str) -> str:
        term = clean_text(value)
        min_length = self._settings.digital_term_min_length
        if not term or len(term) < min_length:
            raise ValidationError(f"digitalTerm must be at least {min_length} characters")
        return term
    
    def _validate_photo_url(self, value: str) -> str:
        if not is_http_url(value):
            raise ValidationError("handoverPhotoUrl must be a valid http(s) URL")
        return value.strip()
