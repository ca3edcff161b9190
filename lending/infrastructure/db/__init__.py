from .mongo_connection import MongoClientManager
from .mongo_unit_of_work import MongoUnitOfWork
from .mongo_loan_request_repository import MongoLoanRequestRepository
from .mongo_loan_offer_repository import MongoLoanOfferRepository
from .mongo_loan_repository import MongoLoanRepository

__all__ = [
    "MongoClientManager",
    "MongoUnitOfWork",
    "MongoLoanRequestRepository",
    "MongoLoanOfferRepository",
    "MongoLoanRepository",
]
