"""
MongoDB Loan Offer Repository
=============================

Concrete implementation of LoanOfferRepository using MongoDB.
"""
from typing import Any, List, Optional, Sequence
from dataclasses import asdict
from pymongo import ReturnDocument
from pymongo.collection import Collection

from lending.domain.constants.loan_fields import LoanOfferFields
from lending.domain.constants.loan_status import OfferStatus
from lending.domain.models.loan_request import LoanOffer
from lending.domain.repositories.loan_offer_repository import LoanOfferRepository
from lending.infrastructure.db.mongo_connection import MongoClientManager
from lending.utils.datetime_utils import ensure_aware, now


class MongoLoanOfferRepository(LoanOfferRepository):
    """MongoDB implementation of LoanOfferRepository."""
    
    def __init__(self, mongo_client: MongoClientManager, collection_name: str):
        self._collection: Collection = mongo_client.get_collection(collection_name)
    
    def _to_entity(self, doc: dict) -> LoanOffer:
        """Convert MongoDB document to LoanOffer entity."""
        if not doc:
            raise ValueError("Document cannot be empty")
        
        return LoanOffer(
            id=doc[LoanOfferFields.ID],
            loan_request_id=doc[LoanOfferFields.LOAN_REQUEST_ID],
            offerer_id=doc[LoanOfferFields.OFFERER_ID],
            status=doc.get(LoanOfferFields.STATUS, OfferStatus.PENDING),
            created_at=ensure_aware(doc.get(LoanOfferFields.CREATED_AT)),
            updated_at=ensure_aware(doc.get(LoanOfferFields.UPDATED_AT)),
        )
    
    def create(self, offer: LoanOffer, session: Optional[Any] = None) -> LoanOffer:
        """Create a new offer in MongoDB."""
        self._collection.insert_one(asdict(offer), session=session)
        return offer
    
    def find_by_id(self, offer_id: str, session: Optional[Any] = None) -> Optional[LoanOffer]:
        """Find an offer by id."""
        doc = self._collection.find_one({LoanOfferFields.ID: offer_id}, session=session)
        return self._to_entity(doc) if doc else None
    
    def find_by_request_id(self, request_id: str, session: Optional[Any] = None) -> List[LoanOffer]:
        """Find all offers on a request, oldest first."""
        docs = self._collection.find(
            {LoanOfferFields.LOAN_REQUEST_ID: request_id},
            session=session,
        ).sort(LoanOfferFields.CREATED_AT, 1)
        return [self._to_entity(doc) for doc in docs]
    
    def accept(self, offer_id: str, session: Optional[Any] = None) -> Optional[LoanOffer]:
        """Mark a pending offer accepted."""
        result = self._collection.find_one_and_update(
            {LoanOfferFields.ID: offer_id, LoanOfferFields.STATUS: OfferStatus.PENDING},
            {"$set": {LoanOfferFields.STATUS: OfferStatus.ACCEPTED, LoanOfferFields.UPDATED_AT: now()}},
            return_document=ReturnDocument.AFTER,
            session=session,
        )
        return self._to_entity(result) if result else None
    
    def reject_pending(
        self,
        request_id: str,
        except_offer_id: Optional[str] = None,
        session: Optional[Any] = None,
    ) -> int:
        """Reject every pending offer on a request, optionally sparing one."""
        query = {
            LoanOfferFields.LOAN_REQUEST_ID: request_id,
            LoanOfferFields.STATUS: OfferStatus.PENDING,
        }
        if except_offer_id:
            query[LoanOfferFields.ID] = {"$ne": except_offer_id}
        
        result = self._collection.update_many(
            query,
            {"$set": {LoanOfferFields.STATUS: OfferStatus.REJECTED, LoanOfferFields.UPDATED_AT: now()}},
            session=session,
        )
        return result.modified_count
    
    def restore_pending(self, offer_ids: Sequence[str], session: Optional[Any] = None) -> int:
        """Undo accept / reject on the given offers."""
        if not offer_ids:
            return 0
        result = self._collection.update_many(
            {
                LoanOfferFields.ID: {"$in": list(offer_ids)},
                LoanOfferFields.STATUS: {"$in": [OfferStatus.ACCEPTED, OfferStatus.REJECTED]},
            },
            {"$set": {LoanOfferFields.STATUS: OfferStatus.PENDING, LoanOfferFields.UPDATED_AT: now()}},
            session=session,
        )
        return result.modified_count
