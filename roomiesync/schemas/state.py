from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional

from roomiesync.schemas.roommate import Roommate
from roomiesync.schemas.expense import Expense
from roomiesync.schemas.task import Task
from roomiesync.schemas.message import ChatMessage


class AppState(BaseModel):
    """
    Immutable snapshot of everything the household client shows.

    Actions never mutate a snapshot; they build a new one with
    `model_copy(update=...)` and hand it back.
    """

    model_config = ConfigDict(frozen=True)

    current_user: Optional[Roommate] = None
    roommates: List[Roommate] = Field(default_factory=list)
    expenses: List[Expense] = Field(default_factory=list)
    tasks: List[Task] = Field(default_factory=list)
    messages: List[ChatMessage] = Field(default_factory=list)
    category_budgets: Dict[str, float] = Field(default_factory=dict)
    category_labels: Dict[str, str] = Field(default_factory=dict)

    def find_roommate(self, roommate_id: str) -> Optional[Roommate]:
        return next((r for r in self.roommates if r.id == roommate_id), None)

    def find_task(self, task_id: str) -> Optional[Task]:
        return next((t for t in self.tasks if t.id == task_id), None)
