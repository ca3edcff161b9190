from .loan_request import LoanRequest, LoanOffer
from .loan import Loan, LoanAction, LoanParty, LoanTransition, LOAN_TRANSITIONS
from .principal import Principal

__all__ = [
    "LoanRequest",
    "LoanOffer",
    "Loan",
    "LoanAction",
    "LoanParty",
    "LoanTransition",
    "LOAN_TRANSITIONS",
    "Principal",
]
