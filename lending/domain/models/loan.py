"""
Loan Model
==========

The binding agreement between a lender (owner) and a borrower, and the
forward-only state machine that governs its execution.

    pending_handover --confirm_handover (owner)--> active
    active --initiate_return (borrower)--> pending_return_confirmation
    pending_return_confirmation --confirm_return (owner)--> returned
    any non-terminal --raise_dispute (owner or borrower)--> disputed
"""
from datetime import date, datetime
from typing import Dict, Optional, Tuple
from dataclasses import dataclass, field

from lending.domain.constants.loan_status import LoanStatus
from lending.utils.datetime_utils import now


class LoanParty:
    """Roles a user can play on a loan"""
    OWNER = "owner"
    BORROWER = "borrower"


class LoanAction:
    """Lifecycle actions a party can take on a loan"""
    CONFIRM_HANDOVER = "confirm_handover"
    INITIATE_RETURN = "initiate_return"
    CONFIRM_RETURN = "confirm_return"
    RAISE_DISPUTE = "raise_dispute"


@dataclass(frozen=True)
class LoanTransition:
    """One row of the loan state machine."""
    action: str
    from_statuses: Tuple[str, ...]
    to_status: str
    allowed_parties: Tuple[str, ...]


LOAN_TRANSITIONS: Dict[str, LoanTransition] = {
    LoanAction.CONFIRM_HANDOVER: LoanTransition(
        action=LoanAction.CONFIRM_HANDOVER,
        from_statuses=(LoanStatus.PENDING_HANDOVER,),
        to_status=LoanStatus.ACTIVE,
        allowed_parties=(LoanParty.OWNER,),
    ),
    LoanAction.INITIATE_RETURN: LoanTransition(
        action=LoanAction.INITIATE_RETURN,
        from_statuses=(LoanStatus.ACTIVE,),
        to_status=LoanStatus.PENDING_RETURN_CONFIRMATION,
        allowed_parties=(LoanParty.BORROWER,),
    ),
    LoanAction.CONFIRM_RETURN: LoanTransition(
        action=LoanAction.CONFIRM_RETURN,
        from_statuses=(LoanStatus.PENDING_RETURN_CONFIRMATION,),
        to_status=LoanStatus.RETURNED,
        allowed_parties=(LoanParty.OWNER,),
    ),
    LoanAction.RAISE_DISPUTE: LoanTransition(
        action=LoanAction.RAISE_DISPUTE,
        from_statuses=LoanStatus.NON_TERMINAL,
        to_status=LoanStatus.DISPUTED,
        allowed_parties=(LoanParty.OWNER, LoanParty.BORROWER),
    ),
}


@dataclass
class Loan:
    """
    Loan domain model.
    
    owner_id (the lender, i.e. the offerer) and borrower_id (the original
    requester) are fixed at formation. Loans are never deleted; the record
    is the audit trail of the transaction.
    """
    id: str
    loan_request_id: str
    offer_id: str
    owner_id: str
    borrower_id: str
    agreed_return_date: date
    digital_term: str
    handover_photo_url: str
    status: str = LoanStatus.PENDING_HANDOVER
    handover_date: Optional[datetime] = None
    actual_return_date: Optional[datetime] = None
    return_condition: Optional[str] = None
    return_condition_notes: Optional[str] = None
    return_photo_url: Optional[str] = None
    dispute_reason: Optional[str] = None
    disputed_by: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: now())
    updated_at: datetime = field(default_factory=lambda: now())
    
    def party_of(self, user_id: str) -> Optional[str]:
        """Return the role user_id plays on this loan, or None."""
        if user_id == self.owner_id:
            return LoanParty.OWNER
        if user_id == self.borrower_id:
            return LoanParty.BORROWER
        return None
    
    def involves(self, user_id: str) -> bool:
        return self.party_of(user_id) is not None
    
    def is_terminal(self) -> bool:
        return self.status in LoanStatus.TERMINAL
