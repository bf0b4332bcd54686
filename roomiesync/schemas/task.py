from pydantic import Field
from typing import Optional
from datetime import date
import uuid

from roomiesync.models.task import TaskStatus
from roomiesync.schemas.base import CamelModel, UtcDateTime


class TaskCreate(CamelModel):
    """Schema for assigning a new chore."""
    title: str = Field(..., min_length=1, max_length=200)
    assigned_to: str = Field(..., description="Roommate ID of the assignee")
    due_date: date
    description: Optional[str] = Field(None, max_length=1000)


class Task(CamelModel):
    """Live, mutable chore."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: str
    assigned_to: str
    due_date: date
    status: TaskStatus = TaskStatus.PENDING
    description: Optional[str] = None
    last_reminded: Optional[UtcDateTime] = None

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED


class TaskStatusUpdate(CamelModel):
    """Targeted status / reminder update sent to PUT /tasks/{id}."""
    status: TaskStatus
    last_reminded: Optional[UtcDateTime] = None
