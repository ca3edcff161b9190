"""
Loan Service
============

Application service for formed loans: agreement formation and the
handover / return lifecycle.
"""
from datetime import date
from typing import Dict, List, Optional, Union

from lending.core.config import Settings
from lending.domain.constants.loan_fields import LoanFields
from lending.domain.events.event_publisher import EventPublisher
from lending.domain.exceptions import ValidationError
from lending.domain.models.loan import Loan, LoanAction
from lending.domain.repositories.loan_offer_repository import LoanOfferRepository
from lending.domain.repositories.loan_repository import LoanRepository
from lending.domain.repositories.loan_request_repository import LoanRequestRepository
from lending.domain.repositories.unit_of_work import UnitOfWork
from lending.application.use_cases.loan.form_agreement import FormAgreementUseCase
from lending.application.use_cases.loan.transition_loan import TransitionLoanUseCase
from lending.application.use_cases.loan.get_loan import GetLoanUseCase
from lending.application.use_cases.loan.list_my_loans import ListMyLoansUseCase
from lending.utils.datetime_utils import now
from lending.utils.utils import clean_text, is_http_url


class LoanService:
    """Application service for loan operations."""
    
    def __init__(
        self,
        request_repository: LoanRequestRepository,
        offer_repository: LoanOfferRepository,
        loan_repository: LoanRepository,
        unit_of_work: UnitOfWork,
        event_publisher: EventPublisher,
        settings: Settings,
    ):
        self._form_agreement_use_case = FormAgreementUseCase(
            request_repository=request_repository,
            offer_repository=offer_repository,
            loan_repository=loan_repository,
            unit_of_work=unit_of_work,
            event_publisher=event_publisher,
            settings=settings,
        )
        self._transition_use_case = TransitionLoanUseCase(loan_repository, event_publisher)
        self._get_use_case = GetLoanUseCase(loan_repository)
        self._list_mine_use_case = ListMyLoansUseCase(loan_repository)
    
    def form_agreement(
        self,
        offer_id: str,
        acting_user_id: str,
        agreed_return_date: Union[str, date],
        digital_term: str,
        handover_photo_url: str,
    ) -> Loan:
        """Accept an offer and record the binding loan agreement."""
        return self._form_agreement_use_case.execute(
            offer_id=offer_id,
            acting_user_id=acting_user_id,
            agreed_return_date=agreed_return_date,
            digital_term=digital_term,
            handover_photo_url=handover_photo_url,
        )
    
    def get_loan(self, loan_id: str, acting_user_id: str) -> Loan:
        """Get a loan the caller is a party to."""
        return self._get_use_case.execute(loan_id, acting_user_id)
    
    def list_my_loans(self, user_id: str) -> Dict[str, List[Loan]]:
        """Loans the user lent and borrowed, newest first."""
        return self._list_mine_use_case.execute(user_id)
    
    def confirm_handover(self, loan_id: str, acting_user_id: str) -> Loan:
        """Owner confirms the item changed hands."""
        return self._transition_use_case.execute(
            loan_id,
            acting_user_id,
            LoanAction.CONFIRM_HANDOVER,
            changes={LoanFields.HANDOVER_DATE: now()},
        )
    
    def initiate_return(
        self,
        loan_id: str,
        acting_user_id: str,
        condition: str,
        notes: Optional[str] = None,
        return_photo_url: Optional[str] = None,
    ) -> Loan:
        """Borrower hands the item back and describes its condition."""
        condition = clean_text(condition)

        def validate() -> None:
            if not condition:
                raise ValidationError("condition is required")
            if return_photo_url is not None and not is_http_url(return_photo_url):
                raise ValidationError("returnPhotoUrl must be a valid http(s) URL")

        return self._transition_use_case.execute(
            loan_id,
            acting_user_id,
            LoanAction.INITIATE_RETURN,
            changes={
                LoanFields.RETURN_CONDITION: condition,
                LoanFields.RETURN_CONDITION_NOTES: clean_text(notes),
                LoanFields.RETURN_PHOTO_URL: return_photo_url.strip() if return_photo_url else None,
            },
            validate=validate,
        )
    
    def confirm_return(self, loan_id: str, acting_user_id: str) -> Loan:
        """Owner confirms the item came back."""
        return self._transition_use_case.execute(
            loan_id,
            acting_user_id,
            LoanAction.CONFIRM_RETURN,
            changes={LoanFields.ACTUAL_RETURN_DATE: now()},
        )
    
    def raise_dispute(self, loan_id: str, acting_user_id: str, reason: Optional[str] = None) -> Loan:
        """Either party contests the loan; disputed loans await manual resolution."""
        return self._transition_use_case.execute(
            loan_id,
            acting_user_id,
            LoanAction.RAISE_DISPUTE,
            changes={
                LoanFields.DISPUTE_REASON: clean_text(reason),
                LoanFields.DISPUTED_BY: acting_user_id,
            },
        )
