"""
Loan Request Controller
=======================

FastAPI controller for loan requests and the offers made on them.
All endpoints act within the caller's condominium.
"""
from typing import List

from fastapi import APIRouter, Depends, status

from lending.application.dto.loan_request_dto import (
    LoanOfferResponse,
    LoanRequestCreateRequest,
    LoanRequestDetailResponse,
    LoanRequestResponse,
)
from lending.api.v1.dependencies import get_current_principal, get_loan_request_service
from lending.application.services.loan_request_service import LoanRequestService
from lending.domain.models.principal import Principal

router = APIRouter(tags=["loan-requests"])


@router.post(
    "",
    response_model=LoanRequestResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Ask neighbours to lend an item",
    description="""
    Create an open loan request in the caller's condominium.
    
    Neighbours see it in their open-request list and can make offers;
    the requester later accepts exactly one of them.
    """
)
def create_loan_request(
    request: LoanRequestCreateRequest,
    principal: Principal = Depends(get_current_principal),
    service: LoanRequestService = Depends(get_loan_request_service),
) -> LoanRequestResponse:
    """Create a loan request."""
    loan_request = service.create_request(
        requester_id=principal.user_id,
        condo_id=principal.condo_id,
        title=request.title,
        description=request.description,
    )
    return LoanRequestResponse.model_validate(loan_request)


@router.get(
    "",
    response_model=List[LoanRequestResponse],
    summary="List open loan requests",
    description="Open requests in the caller's condominium, newest first, excluding the caller's own."
)
def list_open_loan_requests(
    principal: Principal = Depends(get_current_principal),
    service: LoanRequestService = Depends(get_loan_request_service),
) -> List[LoanRequestResponse]:
    """List open loan requests the caller can offer on."""
    requests = service.list_open_requests(principal.condo_id, principal.user_id)
    return [LoanRequestResponse.model_validate(r) for r in requests]


@router.get(
    "/{request_id}",
    response_model=LoanRequestDetailResponse,
    summary="Get loan request with offers",
)
def get_loan_request(
    request_id: str,
    principal: Principal = Depends(get_current_principal),
    service: LoanRequestService = Depends(get_loan_request_service),
) -> LoanRequestDetailResponse:
    """Get a loan request and its offers."""
    loan_request = service.get_request_with_offers(request_id, principal.condo_id)
    return LoanRequestDetailResponse.model_validate(loan_request)


@router.post(
    "/{request_id}/offers",
    response_model=LoanOfferResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Offer to lend",
    description="Make a pending offer on someone else's open request."
)
def create_loan_offer(
    request_id: str,
    principal: Principal = Depends(get_current_principal),
    service: LoanRequestService = Depends(get_loan_request_service),
) -> LoanOfferResponse:
    """Create an offer on a loan request."""
    offer = service.create_offer(request_id, principal.user_id, principal.condo_id)
    return LoanOfferResponse.model_validate(offer)


@router.patch(
    "/{request_id}/cancel",
    response_model=LoanRequestResponse,
    summary="Cancel a loan request",
    description="The requester withdraws an open request; its pending offers are rejected."
)
def cancel_loan_request(
    request_id: str,
    principal: Principal = Depends(get_current_principal),
    service: LoanRequestService = Depends(get_loan_request_service),
) -> LoanRequestResponse:
    """Cancel an open loan request."""
    loan_request = service.cancel_request(request_id, principal.user_id)
    return LoanRequestResponse.model_validate(loan_request)
