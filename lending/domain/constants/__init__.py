from .loan_status import RequestStatus, OfferStatus, LoanStatus
from .loan_fields import LoanRequestFields, LoanOfferFields, LoanFields

__all__ = [
    "RequestStatus",
    "OfferStatus",
    "LoanStatus",
    "LoanRequestFields",
    "LoanOfferFields",
    "LoanFields",
]
