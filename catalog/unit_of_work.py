import logging
from abc import ABC, abstractmethod

from catalog.repository import BookRepository

logger = logging.getLogger(__name__)


class UnitOfWork(ABC):
    """Groups repository access with save/commit/rollback.

    A transactional backend implements this to make the service's
    begin -> mutate -> save -> commit sequence atomic.
    """

    @property
    @abstractmethod
    def books(self) -> BookRepository:
        ...

    @abstractmethod
    def begin_transaction(self) -> None:
        ...

    @abstractmethod
    def save_changes(self) -> int:
        """Flush pending changes; returns the number of affected records."""

    @abstractmethod
    def commit(self) -> None:
        ...

    @abstractmethod
    def rollback(self) -> None:
        ...


class InMemoryUnitOfWork(UnitOfWork):
    """No-op transaction facade over an in-memory repository.

    Changes are visible as soon as the repository call returns, so there is
    nothing to flush and nothing to undo.
    """

    def __init__(self, repository: BookRepository) -> None:
        if repository is None:
            raise ValueError("repository is required")
        self._repository = repository
        self.in_transaction = False

    @property
    def books(self) -> BookRepository:
        return self._repository

    def begin_transaction(self) -> None:
        self.in_transaction = True
        logger.debug("Transaction started")

    def save_changes(self) -> int:
        logger.debug("Changes saved")
        return 1

    def commit(self) -> None:
        if not self.in_transaction:
            raise RuntimeError("commit() called with no transaction in progress")
        self.in_transaction = False
        logger.debug("Transaction committed")

    def rollback(self) -> None:
        self.in_transaction = False
        logger.debug("Transaction rolled back")
