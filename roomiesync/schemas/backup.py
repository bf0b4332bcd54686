from pydantic import Field
from typing import Dict, List, Optional

from roomiesync.schemas.base import CamelModel, UtcDateTime
from roomiesync.schemas.roommate import Roommate
from roomiesync.schemas.expense import Expense
from roomiesync.schemas.task import Task
from roomiesync.schemas.message import ChatMessage


class BackupBundle(CamelModel):
    """
    Single JSON document holding all five collections.

    Serialised keys: roommates, expenses, tasks, messages, budgets,
    budgetLabels, exportedAt.
    """
    roommates: List[Roommate]
    expenses: List[Expense] = Field(default_factory=list)
    tasks: List[Task] = Field(default_factory=list)
    messages: List[ChatMessage] = Field(default_factory=list)
    budgets: Dict[str, float] = Field(default_factory=dict)
    budget_labels: Dict[str, str] = Field(default_factory=dict)
    exported_at: Optional[UtcDateTime] = None
