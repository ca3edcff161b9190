"""
MongoDB Unit of Work
====================

Transaction boundary backed by a MongoDB client session.
"""
import logging
from typing import Callable, TypeVar

from pymongo.client_session import ClientSession

from lending.domain.repositories.unit_of_work import TransactionScope, UnitOfWork
from lending.infrastructure.db.mongo_connection import MongoClientManager

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MongoUnitOfWork(UnitOfWork):
    """
    MongoDB implementation of UnitOfWork.

    With transactions enabled (replica set or sharded cluster) the work
    runs through ClientSession.with_transaction(), which aborts on error
    and re-runs the work after a TransientTransactionError such as a write
    conflict with a concurrent transaction. The re-run reads the state the
    winner committed.

    Standalone servers cannot run multi-document transactions. There each
    write commits on its own and a failure runs the undo steps the work
    registered on its scope.
    """

    def __init__(self, mongo_client: MongoClientManager, transactions_enabled: bool):
        self._mongo_client = mongo_client
        self._transactions_enabled = transactions_enabled

    def run(self, work: Callable[[TransactionScope], T]) -> T:
        if not self._transactions_enabled:
            scope = TransactionScope()
            try:
                return work(scope)
            except Exception:
                scope.rollback()
                raise

        def callback(session: ClientSession) -> T:
            return work(TransactionScope(session, transactional=True))

        with self._mongo_client.client.start_session() as session:
            return session.with_transaction(callback)
