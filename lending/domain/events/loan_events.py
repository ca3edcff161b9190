"""
Loan Events
===========

Notifications emitted for the chat/notification bridge once a change
has been committed. Consumers are downstream; nothing here is awaited.
"""
from datetime import datetime
from typing import Any, Dict
from dataclasses import dataclass, field

from lending.domain.models.loan import Loan
from lending.domain.models.loan_request import LoanOffer, LoanRequest
from lending.utils.datetime_utils import now


class LoanEventType:
    """Event type constants"""
    OFFER_CREATED = "loan.offer_created"
    LOAN_FORMED = "loan.formed"
    LOAN_CLOSED = "loan.closed"


@dataclass
class LoanEvent:
    event_type: str
    payload: Dict[str, Any]
    occurred_at: datetime = field(default_factory=lambda: now())
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": self.event_type,
            "occurred_at": self.occurred_at,
            **self.payload,
        }


def offer_created(offer: LoanOffer, request: LoanRequest) -> LoanEvent:
    return LoanEvent(
        event_type=LoanEventType.OFFER_CREATED,
        payload={
            "offer_id": offer.id,
            "loan_request_id": request.id,
            "offerer_id": offer.offerer_id,
            "requester_id": request.requester_id,
        },
    )


def loan_formed(loan: Loan) -> LoanEvent:
    # The chat bridge opens a conversation between the listed participants
    return LoanEvent(
        event_type=LoanEventType.LOAN_FORMED,
        payload={
            "loan_id": loan.id,
            "loan_request_id": loan.loan_request_id,
            "owner_id": loan.owner_id,
            "borrower_id": loan.borrower_id,
            "participants": [loan.owner_id, loan.borrower_id],
        },
    )


def loan_closed(loan: Loan) -> LoanEvent:
    return LoanEvent(
        event_type=LoanEventType.LOAN_CLOSED,
        payload={
            "loan_id": loan.id,
            "owner_id": loan.owner_id,
            "borrower_id": loan.borrower_id,
            "status": loan.status,
        },
    )
