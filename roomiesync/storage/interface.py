"""
Storage capability shared by the household client backends.

Both backends expose the same load-all / replace-all operations for the
five collections plus a current-session-user slot that always lives
locally. Callers must not assume atomicity across collections.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from roomiesync.schemas.roommate import Roommate
from roomiesync.schemas.expense import Expense
from roomiesync.schemas.task import Task
from roomiesync.schemas.message import ChatMessage


class StorageBackend(ABC):
    """
    Abstract interface for household persistence.

    `get_*` returns the persisted collection (or a seeded default);
    `save_*` replaces the backend's stored representation.
    """

    @abstractmethod
    async def get_roommates(self) -> List[Roommate]:
        """
        Load all roommates.

        Seeds the example household on first run.
        """

    @abstractmethod
    async def save_roommates(self, roommates: List[Roommate]) -> None:
        pass

    @abstractmethod
    async def get_expenses(self) -> List[Expense]:
        pass

    @abstractmethod
    async def save_expenses(self, expenses: List[Expense]) -> None:
        pass

    @abstractmethod
    async def get_tasks(self) -> List[Task]:
        pass

    @abstractmethod
    async def save_tasks(self, tasks: List[Task]) -> None:
        pass

    @abstractmethod
    async def get_messages(self) -> List[ChatMessage]:
        pass

    @abstractmethod
    async def save_messages(self, messages: List[ChatMessage]) -> None:
        pass

    @abstractmethod
    async def get_budgets(self) -> Dict[str, float]:
        pass

    @abstractmethod
    async def save_budgets(self, budgets: Dict[str, float]) -> None:
        pass

    @abstractmethod
    async def get_budget_labels(self) -> Dict[str, str]:
        pass

    @abstractmethod
    async def save_budget_labels(self, labels: Dict[str, str]) -> None:
        pass

    @abstractmethod
    async def get_current_user(self) -> Optional[Roommate]:
        pass

    @abstractmethod
    async def save_current_user(self, user: Optional[Roommate]) -> None:
        """Persist the session user; None clears the slot."""


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """Stored data could not be read or decoded."""
    pass


class StorageWriteError(StorageError):
    """Data could not be written to the backend."""
    pass
