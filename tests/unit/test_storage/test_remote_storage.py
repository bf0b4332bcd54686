import json
import pytest
import httpx
from datetime import date, datetime, timezone

from roomiesync.models.task import TaskStatus
from roomiesync.schemas.expense import Expense
from roomiesync.schemas.task import Task
from roomiesync.storage import JsonFileStore, RemoteStorage, SessionStore, StorageWriteError

BASE_URL = "http://api.test/api/v1"


class FakeService:
    """In-memory stand-in for the REST service, served through httpx.MockTransport."""

    def __init__(self, roommates=None):
        self.collections = {
            "roommates": {r["id"]: r for r in (roommates or [])},
            "expenses": {},
            "tasks": {},
            "messages": {},
        }
        self.maps = {"budgets": {}, "budget_labels": {}}
        self.requests = []
        self.fail_reads = False
        self.fail_writes = False

    def envelope(self, data, status_code=200):
        return httpx.Response(status_code, json={"success": True, "error": None, "data": data})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/api/v1/")
        parts = path.split("/")
        self.requests.append((request.method, path))

        if request.method == "GET" and self.fail_reads:
            return httpx.Response(500, json={"success": False})
        if request.method != "GET" and self.fail_writes:
            return httpx.Response(500, json={"success": False})

        name = parts[0]
        if name in self.maps:
            if request.method == "POST":
                self.maps[name] = json.loads(request.content)
            return self.envelope(self.maps[name])

        records = self.collections[name]
        if request.method == "GET":
            return self.envelope(list(records.values()))
        if request.method == "DELETE":
            records.pop(parts[1], None)
            return self.envelope({"message": "deleted"})

        body = json.loads(request.content)
        if name in ("expenses", "messages"):
            records.setdefault(body["id"], body)
        else:
            records[body["id"]] = body
        return self.envelope(records[body["id"]], status_code=201)


def make_storage(service, tmp_path):
    return RemoteStorage(
        BASE_URL,
        session=SessionStore(JsonFileStore(tmp_path)),
        transport=httpx.MockTransport(service),
    )


def expense(expense_id, amount):
    return Expense(id=expense_id, title="Milk", amount=amount, paid_by="1", category="Grocery",
                   split_among=["1"], date=datetime(2026, 10, 1, tzinfo=timezone.utc))


@pytest.mark.unit
class TestRemoteStorage:
    """HTTP backend against a fake service"""

    @pytest.mark.asyncio
    async def test_reads_unwrap_result_envelope(self, tmp_path, alice, bob):
        service = FakeService(roommates=[alice.to_json(), bob.to_json()])
        storage = make_storage(service, tmp_path)

        roommates = await storage.get_roommates()

        assert [r.name for r in roommates] == ["Admin Alice", "Bob Builder"]

    @pytest.mark.asyncio
    async def test_failed_read_is_empty(self, tmp_path):
        service = FakeService()
        service.fail_reads = True
        storage = make_storage(service, tmp_path)

        assert await storage.get_expenses() == []
        assert await storage.get_budgets() == {}

    @pytest.mark.asyncio
    async def test_failed_write_raises(self, tmp_path):
        service = FakeService()
        service.fail_writes = True
        storage = make_storage(service, tmp_path)

        with pytest.raises(StorageWriteError):
            await storage.save_budgets({"Grocery": 1000})

    @pytest.mark.asyncio
    async def test_expenses_are_append_only(self, tmp_path):
        service = FakeService()
        storage = make_storage(service, tmp_path)

        await storage.save_expenses([expense("e1", 60)])
        await storage.save_expenses([expense("e1", 999), expense("e2", 80), expense("e3", 90)])

        stored = await storage.get_expenses()
        assert [(e.id, e.amount) for e in stored] == [("e1", 60), ("e2", 80), ("e3", 90)]
        assert service.requests.count(("POST", "expenses")) == 3

    @pytest.mark.asyncio
    async def test_tasks_are_upserted(self, tmp_path):
        service = FakeService()
        storage = make_storage(service, tmp_path)
        task = Task(id="t1", title="Dishes", assigned_to="2", due_date=date(2026, 10, 20))

        await storage.save_tasks([task])
        await storage.save_tasks([task.model_copy(update={"status": TaskStatus.COMPLETED})])

        stored = await storage.get_tasks()
        assert len(stored) == 1
        assert stored[0].status == TaskStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_roommates_missing_from_list_are_deleted(self, tmp_path, alice, bob, charlie):
        service = FakeService(roommates=[r.to_json() for r in (alice, bob, charlie)])
        storage = make_storage(service, tmp_path)

        await storage.save_roommates([alice, bob])

        assert sorted(service.collections["roommates"]) == ["1", "2"]
        assert ("DELETE", "roommates/3") in service.requests

    @pytest.mark.asyncio
    async def test_budget_maps_are_replaced(self, tmp_path):
        service = FakeService()
        storage = make_storage(service, tmp_path)

        await storage.save_budgets({"Grocery": 1000, "Rent": 4000})
        await storage.save_budgets({"Rent": 4500})
        await storage.save_budget_labels({"Rent": "Flat rent"})

        assert await storage.get_budgets() == {"Rent": 4500}
        assert await storage.get_budget_labels() == {"Rent": "Flat rent"}

    @pytest.mark.asyncio
    async def test_current_user_never_hits_the_network(self, tmp_path, bob):
        service = FakeService()
        storage = make_storage(service, tmp_path)

        await storage.save_current_user(bob)

        assert (await storage.get_current_user()).id == "2"
        assert service.requests == []
