"""
Create Loan Offer Use Case
==========================

A neighbour pledges to lend the item a request asks for.
"""
import logging

from lending.domain.constants.loan_status import OfferStatus
from lending.domain.events.event_publisher import EventPublisher
from lending.domain.events.loan_events import offer_created
from lending.domain.exceptions import NotFoundError, RequestClosedError, SelfOfferError
from lending.domain.models.loan_request import LoanOffer
from lending.domain.repositories.loan_offer_repository import LoanOfferRepository
from lending.domain.repositories.loan_request_repository import LoanRequestRepository
from lending.application.notify import notify
from lending.utils.utils import new_id

logger = logging.getLogger(__name__)


class CreateLoanOfferUseCase:
    """
    Use case for making an offer on a loan request.
    
    The open-status check here is advisory: a request can close between
    this check and the insert. Agreement formation re-validates offer and
    request state inside its own transaction, so a late offer can never be
    accepted.
    """
    
    def __init__(
        self,
        request_repository: LoanRequestRepository,
        offer_repository: LoanOfferRepository,
        event_publisher: EventPublisher,
    ):
        self._request_repository = request_repository
        self._offer_repository = offer_repository
        self._event_publisher = event_publisher
    
    def execute(self, request_id: str, offerer_id: str, condo_id: str) -> LoanOffer:
        """
        Execute the create offer use case.
        
        Args:
            request_id: Request being offered on
            offerer_id: The neighbour willing to lend
            condo_id: The offerer's condominium
            
        Returns:
            The new pending offer
            
        Raises:
            NotFoundError: If the request does not exist in the offerer's condominium
            SelfOfferError: If the offerer is the requester
            RequestClosedError: If the request is not open
        """
        request = self._request_repository.find_by_id(request_id)
        if not request or request.condo_id != condo_id:
            raise NotFoundError("Loan request", request_id)
        if request.is_requested_by(offerer_id):
            raise SelfOfferError()
        if not request.is_open():
            raise RequestClosedError()
        
        offer = LoanOffer(
            id=new_id(),
            loan_request_id=request.id,
            offerer_id=offerer_id,
            status=OfferStatus.PENDING,
        )
        self._offer_repository.create(offer)
        logger.info("Offer %s made by %s on request %s", offer.id, offerer_id, request.id)
        
        notify(self._event_publisher, offer_created(offer, request))
        return offer
