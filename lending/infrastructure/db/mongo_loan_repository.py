"""
MongoDB Loan Repository
=======================

Concrete implementation of LoanRepository using MongoDB.
"""
from datetime import date
from typing import Any, Dict, List, Optional, Sequence
import logging
from dataclasses import asdict
from pymongo import ReturnDocument
from pymongo.collection import Collection

from lending.domain.constants.loan_fields import LoanFields
from lending.domain.models.loan import Loan
from lending.domain.repositories.loan_repository import LoanRepository
from lending.infrastructure.db.mongo_connection import MongoClientManager
from lending.utils.datetime_utils import ensure_aware, now

logger = logging.getLogger(__name__)


class MongoLoanRepository(LoanRepository):
    """MongoDB implementation of LoanRepository."""
    
    def __init__(self, mongo_client: MongoClientManager, collection_name: str):
        self._collection: Collection = mongo_client.get_collection(collection_name)
    
    def _to_entity(self, doc: dict) -> Loan:
        """Convert MongoDB document to Loan entity."""
        if not doc:
            raise ValueError("Document cannot be empty")
        
        doc = dict(doc)
        doc.pop(LoanFields.MONGO_ID, None)
        
        # BSON has no date type; the agreed return date is kept as YYYY-MM-DD
        return_date = doc.get(LoanFields.AGREED_RETURN_DATE)
        if isinstance(return_date, str):
            doc[LoanFields.AGREED_RETURN_DATE] = date.fromisoformat(return_date)
        
        for field in LoanFields.DATETIME_FIELDS:
            doc[field] = ensure_aware(doc.get(field))
        
        return Loan(**doc)
    
    def _to_document(self, loan: Loan) -> dict:
        """Convert Loan entity to MongoDB document."""
        doc = asdict(loan)
        doc[LoanFields.AGREED_RETURN_DATE] = loan.agreed_return_date.isoformat()
        return doc
    
    def create(self, loan: Loan, session: Optional[Any] = None) -> Loan:
        """Create a new loan in MongoDB."""
        self._collection.insert_one(self._to_document(loan), session=session)
        return loan
    
    def find_by_id(self, loan_id: str, session: Optional[Any] = None) -> Optional[Loan]:
        """Find a loan by id."""
        doc = self._collection.find_one({LoanFields.ID: loan_id}, session=session)
        return self._to_entity(doc) if doc else None
    
    def find_by_request_id(self, request_id: str) -> List[Loan]:
        """Find loans formed from a request."""
        docs = self._collection.find({LoanFields.LOAN_REQUEST_ID: request_id})
        return [self._to_entity(doc) for doc in docs]
    
    def find_by_owner(self, owner_id: str) -> List[Loan]:
        """Find loans lent by a user, newest first."""
        docs = self._collection.find({LoanFields.OWNER_ID: owner_id}).sort(LoanFields.CREATED_AT, -1)
        return [self._to_entity(doc) for doc in docs]
    
    def find_by_borrower(self, borrower_id: str) -> List[Loan]:
        """Find loans borrowed by a user, newest first."""
        docs = self._collection.find({LoanFields.BORROWER_ID: borrower_id}).sort(LoanFields.CREATED_AT, -1)
        return [self._to_entity(doc) for doc in docs]
    
    def transition(
        self,
        loan_id: str,
        from_statuses: Sequence[str],
        to_status: str,
        changes: Optional[Dict[str, Any]] = None,
        session: Optional[Any] = None,
    ) -> Optional[Loan]:
        """Conditionally move a loan to to_status ("update where id=? and status in ?")."""
        update = dict(changes or {})
        update[LoanFields.STATUS] = to_status
        update[LoanFields.UPDATED_AT] = now()
        
        result = self._collection.find_one_and_update(
            {LoanFields.ID: loan_id, LoanFields.STATUS: {"$in": list(from_statuses)}},
            {"$set": update},
            return_document=ReturnDocument.AFTER,
            session=session,
        )
        if not result:
            logger.debug(
                "Loan %s not in %s; transition to '%s' skipped",
                loan_id, list(from_statuses), to_status,
            )
            return None
        return self._to_entity(result)
