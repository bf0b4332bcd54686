from pydantic import Field
from typing import Optional
from datetime import datetime, timezone
import uuid

from roomiesync.models.message import MessageType
from roomiesync.models.task import TaskStatus
from roomiesync.schemas.base import CamelModel, UtcDateTime

SYSTEM_SENDER = "SYSTEM"


class TaskSnapshot(CamelModel):
    """
    Point-in-time copy of a task's identity, title and status.

    Distinct from the live Task: it is frozen when the message is sent.
    """
    model_config = {"frozen": True}

    task_id: str
    title: str
    status: TaskStatus


class ChatMessage(CamelModel):
    """Append-only chat feed entry."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    sender_id: str
    content: str
    timestamp: UtcDateTime = Field(default_factory=lambda: datetime.now(timezone.utc))
    type: MessageType = MessageType.TEXT
    related_task_id: Optional[str] = None
    related_task_title: Optional[str] = None
    related_task_status: Optional[TaskStatus] = None

    @property
    def snapshot(self) -> Optional[TaskSnapshot]:
        if self.related_task_id is None:
            return None
        return TaskSnapshot(
            task_id=self.related_task_id,
            title=self.related_task_title or "",
            status=self.related_task_status or TaskStatus.PENDING,
        )

    @classmethod
    def with_snapshot(
        cls,
        sender_id: str,
        content: str,
        type: MessageType,
        snapshot: TaskSnapshot,
        timestamp: Optional[datetime] = None,
    ) -> "ChatMessage":
        data = dict(
            sender_id=sender_id,
            content=content,
            type=type,
            related_task_id=snapshot.task_id,
            related_task_title=snapshot.title,
            related_task_status=snapshot.status,
        )
        if timestamp is not None:
            data["timestamp"] = timestamp
        return cls(**data)
