"""
Loan Request DTO
================

Pydantic models for loan request and offer API requests and responses.
"""
from datetime import datetime
from typing import List, Optional
from pydantic import Field

from lending.application.dto.base import ApiModel


class LoanRequestCreateRequest(ApiModel):
    """DTO for creating a loan request."""
    title: str = Field(..., description="What the resident wants to borrow")
    description: Optional[str] = Field(None, description="Optional details")
    
    model_config = ApiModel.model_config | {
        "json_schema_extra": {
            "example": {
                "title": "Need a drill",
                "description": "Hanging two shelves this weekend",
            }
        }
    }


class LoanOfferResponse(ApiModel):
    """DTO for offer data."""
    id: str
    loan_request_id: str
    offerer_id: str
    status: str
    created_at: datetime


class LoanRequestResponse(ApiModel):
    """DTO for loan request data."""
    id: str
    requester_id: str
    condo_id: str
    title: str
    description: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: datetime


class LoanRequestDetailResponse(LoanRequestResponse):
    """DTO for a loan request with its offers."""
    offers: List[LoanOfferResponse] = Field(default_factory=list)
