"""
Create Loan Request Use Case
============================

Business use case for a resident asking neighbours to lend an item.
"""
import logging
from typing import Optional

from lending.core.config import Settings
from lending.domain.constants.loan_status import RequestStatus
from lending.domain.exceptions import ValidationError
from lending.domain.models.loan_request import LoanRequest
from lending.domain.repositories.loan_request_repository import LoanRequestRepository
from lending.utils.utils import clean_text, new_id

logger = logging.getLogger(__name__)


class CreateLoanRequestUseCase:
    """
    Use case for creating a loan request.
    
    This encapsulates the business logic for loan request creation.
    """
    
    def __init__(self, request_repository: LoanRequestRepository, settings: Settings):
        """
        Initialize use case with repository.
        
        Args:
            request_repository: Repository for loan request persistence
            settings: Application settings (length bounds)
        """
        self._repository = request_repository
        self._settings = settings
    
    def execute(
        self,
        requester_id: str,
        condo_id: str,
        title: str,
        description: Optional[str] = None,
    ) -> LoanRequest:
        """
        Execute the create loan request use case.
        
        Args:
            requester_id: The resident asking for the item
            condo_id: The requester's own condominium
            title: Short name of the item wanted
            description: Optional details
            
        Returns:
            The new request, always with status 'open'
            
        Raises:
            ValidationError: If the title or description is out of bounds
        """
        title = clean_text(title)
        if not title:
            raise ValidationError("Title is required")
        if len(title) < self._settings.loan_title_min_length:
            raise ValidationError(
                f"Title must be at least {self._settings.loan_title_min_length} characters"
            )
        if len(title) > self._settings.loan_title_max_length:
            raise ValidationError(
                f"Title must be at most {self._settings.loan_title_max_length} characters"
            )
        
        description = clean_text(description)
        if description and len(description) > self._settings.loan_description_max_length:
            raise ValidationError(
                f"Description must be at most {self._settings.loan_description_max_length} characters"
            )
        
        request = LoanRequest(
            id=new_id(),
            requester_id=requester_id,
            condo_id=condo_id,
            title=title,
            description=description,
            status=RequestStatus.OPEN,
        )
        self._repository.create(request)
        logger.info("Loan request %s created by %s in condo %s", request.id, requester_id, condo_id)
        return request
