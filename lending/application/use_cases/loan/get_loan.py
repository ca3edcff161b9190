"""
Get Loan Use Case
=================

Loan details are visible only to the two parties.
"""
from lending.domain.exceptions import NotFoundError, PermissionDeniedError
from lending.domain.models.loan import Loan
from lending.domain.repositories.loan_repository import LoanRepository


class GetLoanUseCase:
    """Use case for reading one loan."""
    
    def __init__(self, loan_repository: LoanRepository):
        self._repository = loan_repository
    
    def execute(self, loan_id: str, acting_user_id: str) -> Loan:
        loan = self._repository.find_by_id(loan_id)
        if not loan:
            raise NotFoundError("Loan", loan_id)
        if not loan.involves(acting_user_id):
            raise PermissionDeniedError("You are not a party to this loan")
        return loan
