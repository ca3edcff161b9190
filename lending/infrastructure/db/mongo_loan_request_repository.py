"""
MongoDB Loan Request Repository
===============================

Concrete implementation of LoanRequestRepository using MongoDB.
"""
from typing import Any, List, Optional
import logging
from dataclasses import asdict
from pymongo import ReturnDocument
from pymongo.collection import Collection

from lending.domain.constants.loan_fields import LoanRequestFields
from lending.domain.constants.loan_status import RequestStatus
from lending.domain.models.loan_request import LoanRequest
from lending.domain.repositories.loan_request_repository import LoanRequestRepository
from lending.infrastructure.db.mongo_connection import MongoClientManager
from lending.utils.datetime_utils import ensure_aware, now

logger = logging.getLogger(__name__)


class MongoLoanRequestRepository(LoanRequestRepository):
    """MongoDB implementation of LoanRequestRepository."""
    
    def __init__(self, mongo_client: MongoClientManager, collection_name: str):
        self._collection: Collection = mongo_client.get_collection(collection_name)
    
    def _to_entity(self, doc: dict) -> LoanRequest:
        """Convert MongoDB document to LoanRequest entity."""
        if not doc:
            raise ValueError("Document cannot be empty")
        
        return LoanRequest(
            id=doc[LoanRequestFields.ID],
            requester_id=doc[LoanRequestFields.REQUESTER_ID],
            condo_id=doc[LoanRequestFields.CONDO_ID],
            title=doc[LoanRequestFields.TITLE],
            description=doc.get(LoanRequestFields.DESCRIPTION),
            status=doc.get(LoanRequestFields.STATUS, RequestStatus.OPEN),
            created_at=ensure_aware(doc.get(LoanRequestFields.CREATED_AT)),
            updated_at=ensure_aware(doc.get(LoanRequestFields.UPDATED_AT)),
        )
    
    def _to_document(self, request: LoanRequest) -> dict:
        """Convert LoanRequest entity to MongoDB document."""
        doc = asdict(request)
        doc.pop("offers", None)
        return doc
    
    def create(self, request: LoanRequest, session: Optional[Any] = None) -> LoanRequest:
        """Create a new loan request in MongoDB."""
        self._collection.insert_one(self._to_document(request), session=session)
        return request
    
    def find_by_id(self, request_id: str, session: Optional[Any] = None) -> Optional[LoanRequest]:
        """Find a loan request by id."""
        doc = self._collection.find_one({LoanRequestFields.ID: request_id}, session=session)
        return self._to_entity(doc) if doc else None
    
    def find_open_by_condo(self, condo_id: str, excluding_requester_id: str) -> List[LoanRequest]:
        """Find open requests in a condominium, excluding the caller's own, newest first."""
        docs = self._collection.find({
            LoanRequestFields.CONDO_ID: condo_id,
            LoanRequestFields.STATUS: RequestStatus.OPEN,
            LoanRequestFields.REQUESTER_ID: {"$ne": excluding_requester_id},
        }).sort(LoanRequestFields.CREATED_AT, -1)
        return [self._to_entity(doc) for doc in docs]
    
    def transition_status(
        self,
        request_id: str,
        from_status: str,
        to_status: str,
        session: Optional[Any] = None,
    ) -> Optional[LoanRequest]:
        """Conditionally move a request between statuses."""
        result = self._collection.find_one_and_update(
            {LoanRequestFields.ID: request_id, LoanRequestFields.STATUS: from_status},
            {"$set": {LoanRequestFields.STATUS: to_status, LoanRequestFields.UPDATED_AT: now()}},
            return_document=ReturnDocument.AFTER,
            session=session,
        )
        if not result:
            logger.debug("Request %s was not '%s'; status left unchanged", request_id, from_status)
            return None
        return self._to_entity(result)
