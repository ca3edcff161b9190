from typing import TYPE_CHECKING
from ...core.config import Settings
from ...domain.repositories.loan_request_repository import LoanRequestRepository
from ...domain.repositories.loan_offer_repository import LoanOfferRepository
from ...domain.repositories.loan_repository import LoanRepository
from ...infrastructure.db.mongo_loan_request_repository import MongoLoanRequestRepository
from ...infrastructure.db.mongo_loan_offer_repository import MongoLoanOfferRepository
from ...infrastructure.db.mongo_loan_repository import MongoLoanRepository

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class RepositoryProvider:
    """Repository registration provider - wires domain interfaces to infrastructure implementations"""
    
    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register all repository implementations.
        Gets database client from database provider and creates repository instances.
        """
        settings = container.get(Settings)
        mongo_client = container.get("mongo_client")
        
        # Domain interfaces -> Infrastructure implementations
        container.register_singleton(
            LoanRequestRepository,
            MongoLoanRequestRepository(mongo_client, settings.loan_requests_collection)
        )
        
        container.register_singleton(
            LoanOfferRepository,
            MongoLoanOfferRepository(mongo_client, settings.loan_offers_collection)
        )
        
        container.register_singleton(
            LoanRepository,
            MongoLoanRepository(mongo_client, settings.loans_collection)
        )
