import pytest
from datetime import date, datetime, timezone

from roomiesync.models.expense import ExpenseCategory
from roomiesync.models.task import TaskStatus
from roomiesync.schemas.expense import Expense
from roomiesync.schemas.roommate import Roommate
from roomiesync.schemas.task import Task
from roomiesync.services import ledger_service


def make_expense(amount, paid_by="1", category=ExpenseCategory.GROCERY.value,
                 split_among=None, when=None, title="Item"):
    return Expense(
        title=title,
        amount=amount,
        paid_by=paid_by,
        category=category,
        split_among=["1", "2", "3"] if split_among is None else split_among,
        date=when or datetime(2026, 10, 5, 12, 0, tzinfo=timezone.utc),
    )


def contribution(amount, paid_by, when=None):
    return make_expense(
        amount, paid_by=paid_by, category=ExpenseCategory.CONTRIBUTION.value,
        split_among=[paid_by], when=when, title="Monthly Rent/Contribution",
    )


@pytest.fixture
def roommates(alice, bob, charlie):
    return [alice, bob, charlie]


@pytest.mark.unit
class TestPoolTotals:
    """Collected, spent and balance of the house fund"""

    def test_pool_balance_is_collected_minus_spent(self):
        expenses = [
            contribution(6000, "1"),
            contribution(2000, "2"),
            make_expense(900),
            make_expense(450, category=ExpenseCategory.PETROL.value),
        ]

        assert ledger_service.total_collected(expenses) == 8000
        assert ledger_service.total_spent(expenses) == 1350
        assert ledger_service.pool_balance(expenses) == 6650

    def test_empty_ledger(self):
        assert ledger_service.pool_balance([]) == 0
        assert ledger_service.total_spent([]) == 0

    def test_pool_balance_can_go_negative(self):
        expenses = [contribution(100, "1"), make_expense(400)]

        assert ledger_service.pool_balance(expenses) == -300


@pytest.mark.unit
class TestPersonStats:
    """Dues and consumption per roommate"""

    def test_full_contribution_means_all_paid_up(self, alice):
        stats = ledger_service.person_stats([alice], [contribution(6000, alice.id)])[0]

        assert stats.dues == 0
        assert stats.all_paid_up is True
        assert stats.target == 6000

    def test_partial_contribution_leaves_dues(self, alice):
        stats = ledger_service.person_stats([alice], [contribution(2000, alice.id)])[0]

        assert stats.contributed == 2000
        assert stats.dues == 4000
        assert stats.all_paid_up is False

    def test_overpayment_floors_dues_at_zero(self, alice):
        assert ledger_service.dues_for(alice, [contribution(7500, alice.id)]) == 0

    def test_shares_sum_to_total_spent_when_everyone_shares(self, roommates):
        expenses = [
            make_expense(900),
            make_expense(300, category=ExpenseCategory.UTILITIES.value),
            contribution(6000, "1"),
        ]

        shares = [ledger_service.share_of(r.id, expenses) for r in roommates]

        assert sum(shares) == pytest.approx(ledger_service.total_spent(expenses))
        assert shares[0] == pytest.approx(400)

    def test_share_only_counts_expenses_person_is_split_into(self, bob):
        expenses = [
            make_expense(600, category=ExpenseCategory.NON_VEG.value, split_among=["1", "3"]),
            make_expense(300, split_among=["1", "2", "3"]),
        ]

        assert ledger_service.share_of(bob.id, expenses) == pytest.approx(100)

    def test_empty_split_contributes_nothing(self, roommates):
        expenses = [make_expense(500, split_among=[])]

        assert all(ledger_service.share_of(r.id, expenses) == 0 for r in roommates)

    def test_displayed_share_rounds_half_up(self, alice):
        expenses = [make_expense(5, split_among=["1", "2"])]

        stats = ledger_service.person_stats([alice], expenses)[0]

        assert stats.share == 3


@pytest.mark.unit
class TestBudgets:
    """Allocation, unallocated balance and budget health"""

    def test_unallocated_balance(self):
        expenses = [contribution(6000, "1"), contribution(6000, "2")]
        budgets = {"Grocery": 5000, "Rent": 4000}

        assert ledger_service.total_allocated(budgets) == 9000
        assert ledger_service.unallocated_balance(expenses, budgets) == 3000

    def test_health_excludes_unallocated_categories(self):
        budgets = {"Grocery": 1000, "Petrol": 0}
        expenses = [make_expense(200, category="Petrol")]

        health = ledger_service.budget_health(expenses, budgets)

        assert [entry.category for entry in health] == ["Grocery"]

    def test_overrun_keeps_spent_but_clamps_percent(self):
        budgets = {"Grocery": 1000}
        expenses = [make_expense(800), make_expense(700)]

        entry = ledger_service.budget_health(expenses, budgets)[0]

        assert entry.spent == 1500
        assert entry.allocated == 1000
        assert entry.percent == 100
        assert entry.overrun is True

    def test_refund_clamps_percent_at_zero(self):
        budgets = {"Grocery": 1000}
        expenses = [make_expense(-200, title="Refund")]

        entry = ledger_service.budget_health(expenses, budgets)[0]

        assert entry.spent == -200
        assert entry.percent == 0
        assert entry.overrun is False

    def test_custom_category_is_listed_after_standard_ones(self):
        budgets = {"Internet": 800, "Grocery": 1000}

        categories = ledger_service.display_categories(budgets)

        assert categories[-1] == "Internet"
        assert ExpenseCategory.CONTRIBUTION.value not in categories

    def test_labels(self):
        labels = {"Internet": "Wi-Fi bill"}

        assert ledger_service.display_label("Internet", labels) == "Wi-Fi bill"
        assert ledger_service.display_label("Grocery", labels) == "Grocery"
        assert ledger_service.display_label("Gym", labels) == "Other"

    def test_category_stats_remaining_may_be_negative(self):
        stats = ledger_service.category_stats(
            "Grocery", [make_expense(1200)], {"Grocery": 1000}
        )

        assert stats.remaining == -200


@pytest.mark.unit
class TestMonthlySummary:
    def test_only_entries_from_requested_month(self):
        october = datetime(2026, 10, 1, tzinfo=timezone.utc)
        september = datetime(2026, 9, 30, 23, 0, tzinfo=timezone.utc)
        expenses = [
            contribution(6000, "1", when=october),
            make_expense(900, when=october),
            make_expense(300, when=september),
        ]

        summary = ledger_service.monthly_summary(expenses, 2026, 10)

        assert summary.month_name == "October 2026"
        assert summary.total_in == 6000
        assert summary.total_out == 900
        assert summary.net == 5100
        assert summary.category_breakdown == {"Grocery": 900}
        assert len(summary.transactions) == 2


@pytest.mark.unit
class TestHelpers:
    def test_default_split_skips_vegetarians_for_non_veg(self, roommates, bob):
        split = ledger_service.default_split(ExpenseCategory.NON_VEG.value, roommates)

        assert bob.id not in split
        assert len(split) == 2

    def test_default_split_includes_everyone_otherwise(self, roommates):
        assert ledger_service.default_split("Grocery", roommates) == ["1", "2", "3"]

    def test_pending_task_count(self):
        tasks = [
            Task(title="Dishes", assigned_to="2", due_date=date(2026, 10, 1)),
            Task(title="Trash", assigned_to="2", due_date=date(2026, 10, 2),
                 status=TaskStatus.COMPLETED),
            Task(title="Mop", assigned_to="3", due_date=date(2026, 10, 2)),
        ]

        assert ledger_service.pending_task_count(tasks, "2") == 1

    def test_summarize(self, roommates):
        expenses = [contribution(6000, "1"), contribution(2000, "2"), make_expense(900)]

        summary = ledger_service.summarize(
            roommates, expenses, {"Grocery": 1000}, today=date(2026, 10, 18)
        )

        assert summary.pool_balance == 7100
        assert summary.unallocated_balance == 7000
        assert [p.dues for p in summary.people] == [0, 4000, 6000]
        assert summary.budget_health[0].percent == pytest.approx(90)
        assert summary.generated_on == date(2026, 10, 18)
