"""
Local durable key-value storage.

Each key is one JSON document on disk (`roomiesync_roommates.json`,
`roomiesync_expenses.json`, ...). File access runs in a worker thread so
the event loop is never blocked.
"""

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import TypeAdapter, ValidationError

from roomiesync.schemas.roommate import Roommate
from roomiesync.schemas.expense import Expense
from roomiesync.schemas.task import Task
from roomiesync.schemas.message import ChatMessage
from roomiesync.seed import INITIAL_ROOMMATES
from roomiesync.storage.interface import (
    StorageBackend,
    StorageReadError,
    StorageWriteError,
)

logger = logging.getLogger(__name__)

KEYS = {
    "ROOMMATES": "roomiesync_roommates",
    "EXPENSES": "roomiesync_expenses",
    "TASKS": "roomiesync_tasks",
    "MESSAGES": "roomiesync_messages",
    "USER": "roomiesync_current_user",
    "BUDGETS": "roomiesync_budgets",
    "BUDGET_LABELS": "roomiesync_budget_labels",
}

_roommates = TypeAdapter(List[Roommate])
_expenses = TypeAdapter(List[Expense])
_tasks = TypeAdapter(List[Task])
_messages = TypeAdapter(List[ChatMessage])
_budgets = TypeAdapter(Dict[str, float])
_labels = TypeAdapter(Dict[str, str])


class JsonFileStore:
    """Minimal key-value store: one JSON file per key inside a directory."""

    def __init__(self, directory: str | os.PathLike):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def read(self, key: str) -> Optional[Any]:
        """Return the decoded value, or None if the key was never written."""
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StorageReadError(f"Could not read '{key}': {e}") from e

    def write(self, key: str, value: Any) -> None:
        path = self._path(key)
        tmp = path.with_suffix(".json.tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(value, indent=2), encoding="utf-8")
            os.replace(tmp, path)
        except OSError as e:
            raise StorageWriteError(f"Could not write '{key}': {e}") from e

    def remove(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            raise StorageWriteError(f"Could not remove '{key}': {e}") from e


class SessionStore:
    """The current-session-user slot. Always local, whatever the backend."""

    def __init__(self, store: JsonFileStore):
        self.store = store

    async def get_current_user(self) -> Optional[Roommate]:
        stored = await asyncio.to_thread(self.store.read, KEYS["USER"])
        if stored is None:
            return None
        try:
            return Roommate.model_validate(stored)
        except ValidationError as e:
            raise StorageReadError(f"Stored session user is invalid: {e}") from e

    async def save_current_user(self, user: Optional[Roommate]) -> None:
        if user:
            await asyncio.to_thread(self.store.write, KEYS["USER"], user.to_json())
        else:
            await asyncio.to_thread(self.store.remove, KEYS["USER"])


class LocalStorage(StorageBackend):
    """Household data kept in JSON files on this machine."""

    def __init__(self, directory: str | os.PathLike):
        self.store = JsonFileStore(directory)
        self.session = SessionStore(self.store)

    async def _load(self, key: str, adapter: TypeAdapter, default: Any) -> Any:
        stored = await asyncio.to_thread(self.store.read, key)
        if stored is None:
            return default
        try:
            return adapter.validate_python(stored)
        except ValidationError as e:
            raise StorageReadError(f"Stored '{key}' is invalid: {e}") from e

    async def _write(self, key: str, value: Any) -> None:
        await asyncio.to_thread(self.store.write, key, value)

    async def _dump_records(self, key: str, records: list) -> None:
        await self._write(key, [record.to_json() for record in records])

    async def get_roommates(self) -> List[Roommate]:
        roommates = await self._load(KEYS["ROOMMATES"], _roommates, None)
        if roommates is None:
            logger.info("No roommates stored yet, seeding the example household")
            await self._dump_records(KEYS["ROOMMATES"], INITIAL_ROOMMATES)
            return list(INITIAL_ROOMMATES)
        return roommates

    async def save_roommates(self, roommates: List[Roommate]) -> None:
        await self._dump_records(KEYS["ROOMMATES"], roommates)

    async def get_expenses(self) -> List[Expense]:
        return await self._load(KEYS["EXPENSES"], _expenses, [])

    async def save_expenses(self, expenses: List[Expense]) -> None:
        await self._dump_records(KEYS["EXPENSES"], expenses)

    async def get_tasks(self) -> List[Task]:
        return await self._load(KEYS["TASKS"], _tasks, [])

    async def save_tasks(self, tasks: List[Task]) -> None:
        await self._dump_records(KEYS["TASKS"], tasks)

    async def get_messages(self) -> List[ChatMessage]:
        return await self._load(KEYS["MESSAGES"], _messages, [])

    async def save_messages(self, messages: List[ChatMessage]) -> None:
        await self._dump_records(KEYS["MESSAGES"], messages)

    async def get_budgets(self) -> Dict[str, float]:
        return await self._load(KEYS["BUDGETS"], _budgets, {})

    async def save_budgets(self, budgets: Dict[str, float]) -> None:
        await self._write(KEYS["BUDGETS"], dict(budgets))

    async def get_budget_labels(self) -> Dict[str, str]:
        return await self._load(KEYS["BUDGET_LABELS"], _labels, {})

    async def save_budget_labels(self, labels: Dict[str, str]) -> None:
        await self._write(KEYS["BUDGET_LABELS"], dict(labels))

    async def get_current_user(self) -> Optional[Roommate]:
        return await self.session.get_current_user()

    async def save_current_user(self, user: Optional[Roommate]) -> None:
        await self.session.save_current_user(user)
