from typing import TYPE_CHECKING
from ...core.config import Settings
from ...domain.events.event_publisher import EventPublisher
from ...domain.repositories.loan_request_repository import LoanRequestRepository
from ...domain.repositories.loan_offer_repository import LoanOfferRepository
from ...domain.repositories.loan_repository import LoanRepository
from ...domain.repositories.unit_of_work import UnitOfWork
from ...application.services.loan_request_service import LoanRequestService
from ...application.services.loan_service import LoanService

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class LoanProvider:
    """Loan service provider - registers request/offer and loan services"""
    
    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register lending services.
        Services are created with repositories from container.
        """
        container.register_singleton(
            LoanRequestService,
            LoanRequestService(
                request_repository=container.get(LoanRequestRepository),
                offer_repository=container.get(LoanOfferRepository),
                unit_of_work=container.get(UnitOfWork),
                event_publisher=container.get(EventPublisher),
                settings=container.get(Settings),
            )
        )
        
        container.register_singleton(
            LoanService,
            LoanService(
                request_repository=container.get(LoanRequestRepository),
                offer_repository=container.get(LoanOfferRepository),
                loan_repository=container.get(LoanRepository),
                unit_of_work=container.get(UnitOfWork),
                event_publisher=container.get(EventPublisher),
                settings=container.get(Settings),
            )
        )
