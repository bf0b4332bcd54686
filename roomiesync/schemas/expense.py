from pydantic import Field
from typing import List, Optional
from datetime import datetime, timezone
import uuid

from roomiesync.models.expense import ExpenseCategory
from roomiesync.schemas.base import CamelModel, UtcDateTime


class ExpenseCreate(CamelModel):
    """Schema for recording an expense or a contribution."""
    title: str = Field(..., min_length=1, max_length=200)
    amount: float = Field(..., gt=0)
    paid_by: str = Field(..., description="Roommate ID of the payer")
    category: str = Field(ExpenseCategory.GROCERY.value, min_length=1, max_length=100)
    split_among: List[str] = Field(
        default_factory=list, description="Roommate IDs sharing the cost"
    )
    date: Optional[UtcDateTime] = None


class Expense(CamelModel):
    """Immutable ledger entry."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: str
    amount: float
    paid_by: str
    category: str
    date: UtcDateTime = Field(default_factory=lambda: datetime.now(timezone.utc))
    split_among: List[str] = Field(default_factory=list)

    @property
    def is_contribution(self) -> bool:
        return self.category == ExpenseCategory.CONTRIBUTION.value
