"""
Loan Request Model
==================

Domain models for a resident's request to borrow an item and the
offers neighbours make against it.
This is a pure domain object with no infrastructure dependencies.
"""
from datetime import datetime
from typing import List, Optional
from dataclasses import dataclass, field

from lending.domain.constants.loan_status import OfferStatus, RequestStatus
from lending.utils.datetime_utils import now


@dataclass
class LoanOffer:
    """
    A neighbour's pledge to lend against a specific request.
    
    Offers are created pending and settle exactly once, when the
    requester forms an agreement or cancels the request.
    """
    id: str
    loan_request_id: str
    offerer_id: str
    status: str = OfferStatus.PENDING
    created_at: datetime = field(default_factory=lambda: now())
    updated_at: datetime = field(default_factory=lambda: now())
    
    def is_pending(self) -> bool:
        """Check if the offer can still be accepted."""
        return self.status == OfferStatus.PENDING


@dataclass
class LoanRequest:
    """
    Loan request domain model.
    
    condo_id is copied from the requester's principal at creation and
    never changes. Only open requests accept new offers.
    """
    id: str
    requester_id: str
    condo_id: str
    title: str
    description: Optional[str] = None
    status: str = RequestStatus.OPEN
    created_at: datetime = field(default_factory=lambda: now())
    updated_at: datetime = field(default_factory=lambda: now())
    # Populated only by detail queries; not persisted on the request document
    offers: List[LoanOffer] = field(default_factory=list)
    
    def is_open(self) -> bool:
        """Check if the request still accepts offers."""
        return self.status == RequestStatus.OPEN
    
    def is_requested_by(self, user_id: str) -> bool:
        return self.requester_id == user_id
