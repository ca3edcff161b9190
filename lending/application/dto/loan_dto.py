"""
Loan DTO
========

Pydantic models for loan agreement and lifecycle API requests and responses.
"""
from datetime import date, datetime
from typing import List, Optional
from pydantic import Field

from lending.application.dto.base import ApiModel


class AgreementCreateRequest(ApiModel):
    """DTO for accepting an offer and forming a loan."""
    offer_id: str = Field(..., description="Offer being accepted")
    agreed_return_date: str = Field(..., description="Due date, YYYY-MM-DD, today or later")
    digital_term: str = Field(..., description="Liability clause agreed by both parties")
    handover_photo_url: str = Field(..., description="Photo of the item's condition")
    
    model_config = ApiModel.model_config | {
        "json_schema_extra": {
            "example": {
                "offerId": "0b5a8f7e-5d0c-4f0e-9a57-3f6f2d1c9e21",
                "agreedReturnDate": "2026-11-02",
                "digitalTerm": "Borrower returns the drill in the same condition or repairs it.",
                "handoverPhotoUrl": "https://uploads.example.com/loans/drill.jpg",
            }
        }
    }


class InitiateReturnRequest(ApiModel):
    """DTO for the borrower handing the item back."""
    condition: str = Field(..., description="Condition of the item on return")
    notes: Optional[str] = Field(None, description="Free-text notes about the return")
    return_photo_url: Optional[str] = Field(None, description="Photo of the returned item")


class DisputeRequest(ApiModel):
    """DTO for raising a dispute."""
    reason: Optional[str] = Field(None, description="Why the loan is being contested")


class LoanResponse(ApiModel):
    """DTO for loan data."""
    id: str
    loan_request_id: str
    offer_id: str
    owner_id: str
    borrower_id: str
    agreed_return_date: date
    digital_term: str
    handover_photo_url: str
    status: str
    handover_date: Optional[datetime] = None
    actual_return_date: Optional[datetime] = None
    return_condition: Optional[str] = None
    return_condition_notes: Optional[str] = None
    return_photo_url: Optional[str] = None
    dispute_reason: Optional[str] = None
    disputed_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class MyLoansResponse(ApiModel):
    """DTO for the caller's loans split by role."""
    lent: List[LoanResponse] = Field(default_factory=list)
    borrowed: List[LoanResponse] = Field(default_factory=list)


class ErrorResponse(ApiModel):
    """DTO for error bodies."""
    error_id: str
    error_code: str
    message: str
    path: Optional[str] = None
