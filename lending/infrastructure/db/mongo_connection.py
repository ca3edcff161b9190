"""
MongoDB Client
==============

MongoDB client manager shared by all repositories.
"""
import logging
from typing import Optional
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.collection import Collection

from lending.core.config import Settings
from lending.domain.constants.loan_fields import LoanFields, LoanOfferFields, LoanRequestFields

logger = logging.getLogger(__name__)


class MongoClientManager:
    """
    MongoDB client manager.
    
    Owns one MongoClient and provides access to the lending collections.
    The DI container holds the only instance; pass a ready client to
    reuse an existing connection.
    """
    
    def __init__(self, settings: Settings, client: Optional[MongoClient] = None):
        self._settings = settings
        self._client: Optional[MongoClient] = client
        self._database: Optional[Database] = None
    
    def _initialize_client(self) -> None:
        """Initialize MongoDB client connection."""
        if self._client is None:
            # tz_aware so datetimes come back with tzinfo=UTC
            self._client = MongoClient(self._settings.mongo_uri, tz_aware=True)
        self._database = self._client[self._settings.mongo_database_name]
        logger.info("Connected to MongoDB database '%s'", self._settings.mongo_database_name)
    
    @property
    def client(self) -> MongoClient:
        if self._client is None or self._database is None:
            self._initialize_client()
        return self._client
    
    def get_database(self) -> Database:
        """Get MongoDB database instance."""
        if self._database is None:
            self._initialize_client()
        return self._database
    
    def get_collection(self, collection_name: str) -> Collection:
        """
        Get a MongoDB collection.
        
        Args:
            collection_name: Name of the collection
            
        Returns:
            MongoDB Collection object
        """
        return self.get_database()[collection_name]
    
    def ensure_indexes(self) -> None:
        """Create the indexes the lending queries rely on."""
        requests = self.get_collection(self._settings.loan_requests_collection)
        requests.create_index([(LoanRequestFields.ID, ASCENDING)], unique=True)
        requests.create_index([
            (LoanRequestFields.CONDO_ID, ASCENDING),
            (LoanRequestFields.STATUS, ASCENDING),
            (LoanRequestFields.CREATED_AT, DESCENDING),
        ])
        
        offers = self.get_collection(self._settings.loan_offers_collection)
        offers.create_index([(LoanOfferFields.ID, ASCENDING)], unique=True)
        offers.create_index([(LoanOfferFields.LOAN_REQUEST_ID, ASCENDING)])
        
        loans = self.get_collection(self._settings.loans_collection)
        loans.create_index([(LoanFields.ID, ASCENDING)], unique=True)
        loans.create_index([(LoanFields.OWNER_ID, ASCENDING)])
        loans.create_index([(LoanFields.BORROWER_ID, ASCENDING)])
        # One loan per request, whatever the write path
        loans.create_index([(LoanFields.LOAN_REQUEST_ID, ASCENDING)], unique=True)
    
    def close(self) -> None:
        """Close MongoDB connection."""
        if self._client:
            self._client.close()
            self._client = None
            self._database = None
