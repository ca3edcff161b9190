"""
Unit of Work Interface
======================

Groups repository writes into one all-or-nothing unit.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TransactionScope:
    """
    Handle passed to the work run by a UnitOfWork.

    session goes to every repository call. When the store cannot run the
    work inside a real transaction, each write commits on its own and the
    work registers an undo step with on_rollback() after every write; the
    steps run in reverse order if the work fails.
    """

    def __init__(self, session: Optional[Any] = None, transactional: bool = False):
        self.session = session
        self.transactional = transactional
        self._undo_steps: List[Callable[[], Any]] = []

    def on_rollback(self, undo: Callable[[], Any]) -> None:
        if not self.transactional:
            self._undo_steps.append(undo)

    def rollback(self) -> None:
        """Run the registered undo steps, newest first."""
        while self._undo_steps:
            undo = self._undo_steps.pop()
            try:
                undo()
            except Exception:
                # Keep undoing the rest; the caller re-raises the original failure
                logger.exception("Undo step failed during rollback")


class UnitOfWork(ABC):
    """Abstract transaction boundary."""

    @abstractmethod
    def run(self, work: Callable[[TransactionScope], T]) -> T:
        """
        Run work as one unit and return its result.

        An exception raised by work aborts the unit and propagates. Work
        may be invoked more than once when the store retries a transient
        conflict, so it must read everything it depends on through the
        scope's session.
        """
        pass
