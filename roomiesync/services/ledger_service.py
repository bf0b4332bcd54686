"""
Ledger and budget aggregation.

Pure functions deriving the house fund figures from immutable snapshots of
expenses, roommates and budget maps. Nothing here performs I/O.

Conventions:
- a `Contribution` expense is money paid into the pool; every other
  category is money spent from it
- an expense's cost is shared equally among its `split_among` roommates;
  an expense with nobody in the split is nobody's share
- category matching is exact string equality
"""

import calendar
import math
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from roomiesync.models.expense import ExpenseCategory
from roomiesync.models.task import TaskStatus
from roomiesync.schemas.expense import Expense
from roomiesync.schemas.ledger import (
    BudgetHealthEntry,
    CategoryStats,
    LedgerSummary,
    MonthlySummary,
    PersonStats,
)
from roomiesync.schemas.roommate import Roommate
from roomiesync.schemas.task import Task

CONTRIBUTION = ExpenseCategory.CONTRIBUTION.value
STANDARD_CATEGORIES = [c.value for c in ExpenseCategory]
GENERIC_LABEL = ExpenseCategory.OTHER.value


def _contributions(expenses: Iterable[Expense]) -> List[Expense]:
    return [e for e in expenses if e.category == CONTRIBUTION]


def _spending(expenses: Iterable[Expense]) -> List[Expense]:
    return [e for e in expenses if e.category != CONTRIBUTION]


def _round_half_up(value: float) -> float:
    return math.floor(value + 0.5)


def total_collected(expenses: Iterable[Expense]) -> float:
    """Sum of all contribution entries."""
    return sum(e.amount for e in _contributions(expenses))


def total_spent(expenses: Iterable[Expense]) -> float:
    """Sum of all non-contribution entries."""
    return sum(e.amount for e in _spending(expenses))


def pool_balance(expenses: Sequence[Expense]) -> float:
    return total_collected(expenses) - total_spent(expenses)


def contributed_by(person_id: str, expenses: Iterable[Expense]) -> float:
    return sum(e.amount for e in _contributions(expenses) if e.paid_by == person_id)


def share_of(person_id: str, expenses: Iterable[Expense]) -> float:
    """
    How much of the pooled spending this person consumed.

    Each non-contribution expense the person is part of contributes
    amount / len(split_among).
    """
    share = 0.0
    for expense in _spending(expenses):
        if not expense.split_among:
            continue
        if person_id in expense.split_among:
            share += expense.amount / len(expense.split_among)
    return share


def dues_for(roommate: Roommate, expenses: Iterable[Expense]) -> float:
    """Outstanding contribution, floored at zero."""
    dues = roommate.agreed_contribution - contributed_by(roommate.id, expenses)
    return dues if dues > 0 else 0


def person_stats(roommates: Iterable[Roommate], expenses: Sequence[Expense]) -> List[PersonStats]:
    return [
        PersonStats(
            roommate_id=person.id,
            name=person.name,
            contributed=contributed_by(person.id, expenses),
            share=_round_half_up(share_of(person.id, expenses)),
            dues=dues_for(person, expenses),
            target=person.agreed_contribution,
        )
        for person in roommates
    ]


def category_spent(expenses: Iterable[Expense]) -> Dict[str, float]:
    """Spending per category, contributions excluded, in first-seen order."""
    totals: Dict[str, float] = defaultdict(float)
    for expense in _spending(expenses):
        totals[expense.category] += expense.amount
    return dict(totals)


def category_stats(
    category: str, expenses: Iterable[Expense], budgets: Dict[str, float]
) -> CategoryStats:
    spent = sum(e.amount for e in expenses if e.category == category)
    allocated = budgets.get(category) or 0
    return CategoryStats(
        category=category, spent=spent, allocated=allocated, remaining=allocated - spent
    )


def total_allocated(budgets: Dict[str, float]) -> float:
    return sum(amount or 0 for amount in budgets.values())


def unallocated_balance(expenses: Sequence[Expense], budgets: Dict[str, float]) -> float:
    """Collected money not yet promised to any category."""
    return total_collected(expenses) - total_allocated(budgets)


def display_categories(budgets: Dict[str, float]) -> List[str]:
    """Standard spending categories followed by custom budget keys."""
    standard = [c for c in STANDARD_CATEGORIES if c != CONTRIBUTION]
    custom = [k for k in budgets if k not in standard and k != CONTRIBUTION]
    return standard + custom


def display_label(category: str, labels: Optional[Dict[str, str]] = None) -> str:
    """Human label for a category; unknown keys fall back to the generic label."""
    label = (labels or {}).get(category)
    if label:
        return label
    if category in STANDARD_CATEGORIES:
        return category
    return GENERIC_LABEL


def budget_health(
    expenses: Sequence[Expense],
    budgets: Dict[str, float],
    labels: Optional[Dict[str, str]] = None,
) -> List[BudgetHealthEntry]:
    """
    Spent vs allocated for every category with a positive allocation.

    `spent` is reported as-is so overruns stay visible; only `percent`
    is clamped to 100.
    """
    entries = []
    for category in display_categories(budgets):
        allocated = budgets.get(category) or 0
        if allocated <= 0:
            continue
        spent = sum(e.amount for e in expenses if e.category == category)
        entries.append(
            BudgetHealthEntry(
                category=category,
                label=display_label(category, labels),
                spent=spent,
                allocated=allocated,
                percent=max(0, min(spent / allocated * 100, 100)),
            )
        )
    return entries


def expenses_in_month(expenses: Iterable[Expense], year: int, month: int) -> List[Expense]:
    return [e for e in expenses if e.date.year == year and e.date.month == month]


def monthly_summary(expenses: Iterable[Expense], year: int, month: int) -> MonthlySummary:
    monthly = expenses_in_month(expenses, year, month)
    total_in = total_collected(monthly)
    total_out = total_spent(monthly)
    return MonthlySummary(
        year=year,
        month=month,
        month_name=f"{calendar.month_name[month]} {year}",
        total_in=total_in,
        total_out=total_out,
        net=total_in - total_out,
        category_breakdown=category_spent(monthly),
        transactions=monthly,
    )


def pending_task_count(tasks: Iterable[Task], user_id: str) -> int:
    return sum(
        1 for t in tasks if t.assigned_to == user_id and t.status == TaskStatus.PENDING
    )


def default_split(category: str, roommates: Iterable[Roommate]) -> List[str]:
    """Everybody shares by default; vegetarians sit out non-veg purchases."""
    if category == ExpenseCategory.NON_VEG.value:
        return [r.id for r in roommates if not r.is_vegetarian]
    return [r.id for r in roommates]


def summarize(
    roommates: Sequence[Roommate],
    expenses: Sequence[Expense],
    budgets: Dict[str, float],
    labels: Optional[Dict[str, str]] = None,
    today: Optional[date] = None,
) -> LedgerSummary:
    """Bundle every dashboard figure into one LedgerSummary."""
    return LedgerSummary(
        total_collected=total_collected(expenses),
        total_spent=total_spent(expenses),
        pool_balance=pool_balance(expenses),
        total_allocated=total_allocated(budgets),
        unallocated_balance=unallocated_balance(expenses, budgets),
        people=person_stats(roommates, expenses),
        categories=[
            category_stats(c, expenses, budgets) for c in display_categories(budgets)
        ],
        budget_health=budget_health(expenses, budgets, labels),
        generated_on=today or date.today(),
    )
