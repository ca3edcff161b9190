from .loan_request_repository import LoanRequestRepository
from .loan_offer_repository import LoanOfferRepository
from .loan_repository import LoanRepository
from .unit_of_work import UnitOfWork

__all__ = [
    "LoanRequestRepository",
    "LoanOfferRepository",
    "LoanRepository",
    "UnitOfWork",
]
