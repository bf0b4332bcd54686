"""
HTTP backend talking to the RoomieSync REST service.

Replace semantics differ per collection:
- budgets / budget labels: the server deletes and reinserts the whole map
- roommates / tasks: upsert by id (roommates missing from the new list are deleted)
- expenses / messages: append-only, every item not yet stored is inserted

Reads that fail are logged and treated as empty. Writes that fail raise
StorageWriteError. The current-user slot stays local.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Set

import httpx
from pydantic import TypeAdapter, ValidationError

from roomiesync.schemas.roommate import Roommate
from roomiesync.schemas.expense import Expense
from roomiesync.schemas.task import Task
from roomiesync.schemas.message import ChatMessage
from roomiesync.storage.interface import StorageBackend, StorageWriteError
from roomiesync.storage.local import SessionStore

logger = logging.getLogger(__name__)

_roommates = TypeAdapter(List[Roommate])
_expenses = TypeAdapter(List[Expense])
_tasks = TypeAdapter(List[Task])
_messages = TypeAdapter(List[ChatMessage])
_budgets = TypeAdapter(Dict[str, float])
_labels = TypeAdapter(Dict[str, str])


class RemoteStorage(StorageBackend):
    """Household data stored behind the REST/SQL service."""

    def __init__(
        self,
        base_url: str,
        session: SessionStore,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self._transport
        )

    @staticmethod
    def _unwrap(payload: Any) -> Any:
        # The service wraps every body in a Result envelope
        if isinstance(payload, dict) and "success" in payload:
            return payload.get("data")
        return payload

    async def _fetch(self, endpoint: str) -> Optional[Any]:
        """GET an endpoint; None on any failure."""
        try:
            async with self._client() as client:
                response = await client.get(endpoint)
                response.raise_for_status()
                return self._unwrap(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"API Error ({endpoint}): {e}")
            return None

    async def _send(self, method: str, endpoint: str, body: Any = None) -> None:
        try:
            async with self._client() as client:
                response = await client.request(method, endpoint, json=body)
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"API Error ({method} {endpoint}): {e}")
            raise StorageWriteError(f"{method} {endpoint} failed: {e}") from e

    async def _fetch_list(self, endpoint: str, adapter: TypeAdapter) -> list:
        data = await self._fetch(endpoint)
        if not data:
            return []
        try:
            return adapter.validate_python(data)
        except ValidationError as e:
            logger.error(f"API Error ({endpoint}): unexpected payload: {e}")
            return []

    async def _fetch_map(self, endpoint: str, adapter: TypeAdapter) -> dict:
        data = await self._fetch(endpoint)
        if not data:
            return {}
        try:
            return adapter.validate_python(data)
        except ValidationError as e:
            logger.error(f"API Error ({endpoint}): unexpected payload: {e}")
            return {}

    async def _stored_ids(self, endpoint: str) -> Optional[Set[str]]:
        data = await self._fetch(endpoint)
        if data is None:
            return None
        return {item["id"] for item in data if isinstance(item, dict) and "id" in item}

    async def _append_new(self, endpoint: str, records: Iterable) -> None:
        # Unknown server state means everything is posted; inserts are idempotent by id
        stored = await self._stored_ids(endpoint) or set()
        for record in records:
            if record.id not in stored:
                await self._send("POST", endpoint, record.to_json())

    async def get_roommates(self) -> List[Roommate]:
        return await self._fetch_list("/roommates", _roommates)

    async def save_roommates(self, roommates: List[Roommate]) -> None:
        stored = await self._stored_ids("/roommates")
        for roommate in roommates:
            await self._send("POST", "/roommates", roommate.to_json())
        if stored:
            keep = {r.id for r in roommates}
            for stale_id in sorted(stored - keep):
                await self._send("DELETE", f"/roommates/{stale_id}")

    async def get_expenses(self) -> List[Expense]:
        return await self._fetch_list("/expenses", _expenses)

    async def save_expenses(self, expenses: List[Expense]) -> None:
        await self._append_new("/expenses", expenses)

    async def get_tasks(self) -> List[Task]:
        return await self._fetch_list("/tasks", _tasks)

    async def save_tasks(self, tasks: List[Task]) -> None:
        for task in tasks:
            await self._send("POST", "/tasks", task.to_json())

    async def get_messages(self) -> List[ChatMessage]:
        return await self._fetch_list("/messages", _messages)

    async def save_messages(self, messages: List[ChatMessage]) -> None:
        await self._append_new("/messages", messages)

    async def get_budgets(self) -> Dict[str, float]:
        return await self._fetch_map("/budgets", _budgets)

    async def save_budgets(self, budgets: Dict[str, float]) -> None:
        await self._send("POST", "/budgets", dict(budgets))

    async def get_budget_labels(self) -> Dict[str, str]:
        return await self._fetch_map("/budget_labels", _labels)

    async def save_budget_labels(self, labels: Dict[str, str]) -> None:
        await self._send("POST", "/budget_labels", dict(labels))

    async def get_current_user(self) -> Optional[Roommate]:
        return await self.session.get_current_user()

    async def save_current_user(self, user: Optional[Roommate]) -> None:
        await self.session.save_current_user(user)
