"""
Transition Loan Use Case
========================

Applies one row of the loan state machine (see lending.domain.models.loan)
on behalf of one of the loan's two parties.
"""
import logging
from typing import Any, Callable, Dict, Optional

from lending.domain.events.event_publisher import EventPublisher
from lending.domain.events.loan_events import loan_closed
from lending.domain.exceptions import (
    InvalidStateTransitionError,
    NotFoundError,
    PermissionDeniedError,
)
from lending.domain.models.loan import LOAN_TRANSITIONS, Loan
from lending.domain.repositories.loan_repository import LoanRepository
from lending.application.notify import notify

logger = logging.getLogger(__name__)


class TransitionLoanUseCase:
    """
    Use case for moving a loan forward.
    
    Checks run in a fixed order: existence, then who is acting, then the
    current status. The write itself is a conditional update on the
    expected status, so a double submit or a race with the other party
    ends in InvalidStateTransitionError instead of a silent overwrite.
    """
    
    def __init__(self, loan_repository: LoanRepository, event_publisher: EventPublisher):
        self._repository = loan_repository
        self._event_publisher = event_publisher
    
    def execute(
        self,
        loan_id: str,
        acting_user_id: str,
        action: str,
        changes: Optional[Dict[str, Any]] = None,
        validate: Optional[Callable[[], None]] = None,
    ) -> Loan:
        """
        Execute a lifecycle transition.
        
        Args:
            loan_id: Loan to move
            acting_user_id: The caller
            action: One of LoanAction
            changes: Extra fields written together with the new status
            validate: Checks the caller's input; runs once the caller is known to be allowed
            
        Returns:
            The updated loan
            
        Raises:
            NotFoundError: If the loan does not exist
            PermissionDeniedError: If the caller is not a party, or the wrong party for this action
            ValidationError: If validate rejects the input
            InvalidStateTransitionError: If the loan is not in a state the action starts from
        """
        transition = LOAN_TRANSITIONS[action]
        
        loan = self._repository.find_by_id(loan_id)
        if not loan:
            raise NotFoundError("Loan", loan_id)
        
        party = loan.party_of(acting_user_id)
        if party is None:
            raise PermissionDeniedError("You are not a party to this loan")
        if party not in transition.allowed_parties:
            allowed = " or ".join(transition.allowed_parties)
            raise PermissionDeniedError(f"Only the {allowed} may {action.replace('_', ' ')}")
        
        if validate is not None:
            validate()
        
        if loan.status not in transition.from_statuses:
            raise InvalidStateTransitionError(loan.id, loan.status, action)
        
        updated = self._repository.transition(
            loan.id,
            transition.from_statuses,
            transition.to_status,
            changes=changes,
        )
        if updated is None:
            # Someone else moved the loan between our read and the write
            current = self._repository.find_by_id(loan.id)
            raise InvalidStateTransitionError(
                loan.id, current.status if current else loan.status, action
            )
        
        logger.info(
            "Loan %s: %s by %s (%s -> %s)",
            loan.id, action, party, loan.status, updated.status,
        )
        if updated.is_terminal():
            notify(self._event_publisher, loan_closed(updated))
        return updated
