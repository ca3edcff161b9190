from typing import TYPE_CHECKING
from ...core.config import Settings
from ...domain.repositories.unit_of_work import UnitOfWork
from ...infrastructure.db.mongo_connection import MongoClientManager
from ...infrastructure.db.mongo_unit_of_work import MongoUnitOfWork

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class DatabaseProvider:
    """Centralized database connection provider - single source of truth for all DB connections"""
    
    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register the MongoDB client manager and the unit of work.
        A client manager registered beforehand (e.g. one wrapping an
        existing MongoClient) is kept.
        """
        settings = container.get(Settings)
        
        if not container.has("mongo_client"):
            container.register_singleton("mongo_client", MongoClientManager(settings))
        mongo_client = container.get("mongo_client")
        
        container.register_singleton(
            UnitOfWork,
            MongoUnitOfWork(mongo_client, transactions_enabled=settings.mongo_transactions_enabled),
        )
