from pydantic import BaseModel, Field
from typing import List, Optional


class ParseExpenseRequest(BaseModel):
    """Free-text expense description, e.g. 'paid 450 for chicken and eggs'."""
    text: str = Field(..., min_length=1, max_length=500)


class ParsedExpense(BaseModel):
    """Best-effort structured expense extracted by the model."""
    title: Optional[str] = None
    amount: Optional[float] = None
    category: Optional[str] = None


class ExpenseDraft(BaseModel):
    """Pre-filled expense form built from a parsed expense."""
    title: str = ""
    amount: Optional[float] = None
    category: str
    split_among: List[str] = Field(default_factory=list)


class ReminderRequest(BaseModel):
    """Inputs for a generated task reminder."""
    task_title: str = Field(..., min_length=1, max_length=200)
    assignee_name: str = Field(..., min_length=1, max_length=100)
    days_overdue: int = Field(1, ge=1)


class ReminderResponse(BaseModel):
    message: str
