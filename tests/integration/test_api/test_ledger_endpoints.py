import pytest


@pytest.fixture
def october_ledger(client, seeded_roommates):
    entries = [
        {"id": "c1", "title": "Monthly Rent/Contribution", "amount": 6000, "paidBy": "1",
         "category": "Contribution", "splitAmong": ["1"], "date": "2026-10-01T08:00:00Z"},
        {"id": "c2", "title": "Monthly Rent/Contribution", "amount": 2000, "paidBy": "2",
         "category": "Contribution", "splitAmong": ["2"], "date": "2026-10-02T08:00:00Z"},
        {"id": "x1", "title": "Groceries", "amount": 900, "paidBy": "3",
         "category": "Grocery", "splitAmong": ["1", "2", "3"], "date": "2026-10-05T18:00:00Z"},
    ]
    for entry in entries:
        client.post("/api/v1/expenses", json=entry)
    client.post("/api/v1/budgets", json={"Grocery": 1000, "Petrol": 0})
    return entries


@pytest.mark.integration
class TestLedgerEndpoints:
    """Dashboard summary and monthly CSV"""

    def test_summary(self, client, october_ledger):
        response = client.get("/api/v1/ledger/summary")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total_collected"] == 8000
        assert data["pool_balance"] == 7100
        dues = {p["name"]: p["dues"] for p in data["people"]}
        assert dues == {"Admin Alice": 0, "Bob Builder": 4000, "Charlie Chef": 6000}
        assert [b["category"] for b in data["budget_health"]] == ["Grocery"]

    def test_monthly_report_download(self, client, october_ledger):
        response = client.get("/api/v1/ledger/report", params={"month": "2026-10"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert 'filename="RoomieSync_Report_2026-10.csv"' in response.headers["content-disposition"]
        assert response.text.startswith("ROOMIESYNC MONTHLY REPORT - OCTOBER 2026")
        assert "2026-10-05,Groceries,Grocery,Charlie Chef,Rs. 900,EXPENSE" in response.text

    def test_empty_month(self, client, october_ledger):
        response = client.get("/api/v1/ledger/report", params={"month": "2026-11"})

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "No transactions found for November 2026"

    def test_month_format_validated(self, client):
        response = client.get("/api/v1/ledger/report", params={"month": "October"})

        assert response.status_code == 422


@pytest.mark.integration
def test_root_and_health(client):
    assert client.get("/").json()["data"]["status"] == "online"
    assert client.get("/health").json()["data"]["database"] == "connected"
