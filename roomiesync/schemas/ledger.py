from pydantic import BaseModel, Field, computed_field
from typing import Dict, List
from datetime import date

from roomiesync.schemas.expense import Expense


class PersonStats(BaseModel):
    """Contribution/consumption figures for one roommate."""
    roommate_id: str
    name: str
    contributed: float
    share: float = Field(..., description="Share of pooled spending, rounded for display")
    dues: float = Field(..., ge=0, description="Outstanding contribution, floored at zero")
    target: float

    @computed_field
    @property
    def all_paid_up(self) -> bool:
        return self.dues == 0


class CategoryStats(BaseModel):
    """Spent vs allocated for one category. Remaining may be negative."""
    category: str
    spent: float
    allocated: float
    remaining: float


class BudgetHealthEntry(BaseModel):
    """One progress bar of the budget health panel."""
    category: str
    label: str
    spent: float
    allocated: float
    percent: float = Field(..., ge=0, le=100, description="Clamped for the progress bar only")

    @computed_field
    @property
    def overrun(self) -> bool:
        return self.spent > self.allocated


class MonthlySummary(BaseModel):
    """Income/expense totals for one calendar month."""
    year: int
    month: int
    month_name: str
    total_in: float
    total_out: float
    net: float
    category_breakdown: Dict[str, float] = Field(default_factory=dict)
    transactions: List[Expense] = Field(default_factory=list)


class LedgerSummary(BaseModel):
    """House fund overview shown on the dashboard."""
    total_collected: float
    total_spent: float
    pool_balance: float
    total_allocated: float
    unallocated_balance: float
    people: List[PersonStats] = Field(default_factory=list)
    categories: List[CategoryStats] = Field(default_factory=list)
    budget_health: List[BudgetHealthEntry] = Field(default_factory=list)
    generated_on: date
