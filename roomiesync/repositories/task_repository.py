from sqlalchemy.orm import Session
from typing import Optional
from datetime import datetime
from roomiesync.models.task import Task, TaskStatus
from roomiesync.repositories.repository import BaseRepository


class TaskRepository(BaseRepository[Task]):
    """Repository for household chores."""

    def __init__(self, db: Session):
        super().__init__(Task, db)

    def update_status(
        self, task_id: str, status: TaskStatus, last_reminded: Optional[datetime] = None
    ) -> Optional[Task]:
        """
        Targeted update of status and reminder time.

        last_reminded is only written when given, so a plain status
        change keeps the previous reminder stamp.
        """
        data = {"status": status}
        if last_reminded is not None:
            data["last_reminded"] = last_reminded
        return self.update(task_id, data)
