"""
Loan Controller
===============

FastAPI controller for loan agreements and the handover / return
lifecycle. Only the two parties named on a loan can see or move it.
"""
from typing import Optional

from fastapi import APIRouter, Body, Depends, status

from lending.application.dto.loan_dto import (
    AgreementCreateRequest,
    DisputeRequest,
    InitiateReturnRequest,
    LoanResponse,
    MyLoansResponse,
)
from lending.api.v1.dependencies import get_current_principal, get_loan_service
from lending.application.services.loan_service import LoanService
from lending.domain.models.principal import Principal

router = APIRouter(tags=["loans"])


@router.post(
    "/loans/agreements",
    response_model=LoanResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Accept an offer and form a loan",
    description="""
    Accept one pending offer on the caller's own request.
    
    In one transaction:
    1. A loan is created in status 'pending_handover'
    2. The chosen offer becomes 'accepted'
    3. Every other pending offer on the request becomes 'rejected'
    4. The request becomes 'fulfilled'
    
    Returns 409 if the offer was already settled (e.g. another offer won).
    """
)
def form_agreement(
    request: AgreementCreateRequest,
    principal: Principal = Depends(get_current_principal),
    service: LoanService = Depends(get_loan_service),
) -> LoanResponse:
    """Form a loan agreement from an offer."""
    loan = service.form_agreement(
        offer_id=request.offer_id,
        acting_user_id=principal.user_id,
        agreed_return_date=request.agreed_return_date,
        digital_term=request.digital_term,
        handover_photo_url=request.handover_photo_url,
    )
    return LoanResponse.model_validate(loan)


@router.get(
    "/my-loans",
    response_model=MyLoansResponse,
    summary="List the caller's loans",
    description="Loans the caller lent and borrowed, newest first."
)
def list_my_loans(
    principal: Principal = Depends(get_current_principal),
    service: LoanService = Depends(get_loan_service),
) -> MyLoansResponse:
    """List loans split by role."""
    loans = service.list_my_loans(principal.user_id)
    return MyLoansResponse(
        lent=[LoanResponse.model_validate(loan) for loan in loans["lent"]],
        borrowed=[LoanResponse.model_validate(loan) for loan in loans["borrowed"]],
    )


@router.get(
    "/loans/{loan_id}",
    response_model=LoanResponse,
    summary="Get loan by ID",
)
def get_loan(
    loan_id: str,
    principal: Principal = Depends(get_current_principal),
    service: LoanService = Depends(get_loan_service),
) -> LoanResponse:
    """Get a loan the caller is a party to."""
    return LoanResponse.model_validate(service.get_loan(loan_id, principal.user_id))


@router.patch(
    "/loans/{loan_id}/confirm-handover",
    response_model=LoanResponse,
    summary="Owner confirms handover",
    description="pending_handover -> active. Only the owner (lender) may call this."
)
def confirm_handover(
    loan_id: str,
    principal: Principal = Depends(get_current_principal),
    service: LoanService = Depends(get_loan_service),
) -> LoanResponse:
    """Confirm the item was handed over."""
    return LoanResponse.model_validate(service.confirm_handover(loan_id, principal.user_id))


@router.patch(
    "/loans/{loan_id}/initiate-return",
    response_model=LoanResponse,
    summary="Borrower returns the item",
    description="active -> pending_return_confirmation. Only the borrower may call this."
)
def initiate_return(
    loan_id: str,
    request: InitiateReturnRequest,
    principal: Principal = Depends(get_current_principal),
    service: LoanService = Depends(get_loan_service),
) -> LoanResponse:
    """Start the return of a borrowed item."""
    loan = service.initiate_return(
        loan_id,
        principal.user_id,
        condition=request.condition,
        notes=request.notes,
        return_photo_url=request.return_photo_url,
    )
    return LoanResponse.model_validate(loan)


@router.patch(
    "/loans/{loan_id}/confirm-return",
    response_model=LoanResponse,
    summary="Owner confirms the return",
    description="pending_return_confirmation -> returned. Only the owner may call this."
)
def confirm_return(
    loan_id: str,
    principal: Principal = Depends(get_current_principal),
    service: LoanService = Depends(get_loan_service),
) -> LoanResponse:
    """Confirm the item came back."""
    return LoanResponse.model_validate(service.confirm_return(loan_id, principal.user_id))


@router.patch(
    "/loans/{loan_id}/dispute",
    response_model=LoanResponse,
    summary="Raise a dispute",
    description="Any non-terminal status -> disputed. Either party may call this."
)
def raise_dispute(
    loan_id: str,
    request: Optional[DisputeRequest] = Body(None),
    principal: Principal = Depends(get_current_principal),
    service: LoanService = Depends(get_loan_service),
) -> LoanResponse:
    """Contest a loan."""
    reason = request.reason if request else None
    return LoanResponse.model_validate(service.raise_dispute(loan_id, principal.user_id, reason))
