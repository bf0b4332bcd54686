from sqlalchemy import String, Text, DateTime, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column
from typing import Optional
from datetime import datetime
import enum
from roomiesync.models.base import BaseModel
from roomiesync.models.task import TaskStatus


class MessageType(str, enum.Enum):
    """Kinds of chat feed entries"""

    TEXT = "TEXT"
    TASK_ASSIGNED = "TASK_ASSIGNED"
    TASK_UPDATED = "TASK_UPDATED"


class Message(BaseModel):
    """
    Append-only chat feed entry.

    related_task_* columns hold a snapshot of the task taken when the
    message was sent; later task changes do not touch them.
    """

    __tablename__ = "messages"

    sender_id: Mapped[str] = mapped_column(String(64), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    type: Mapped[MessageType] = mapped_column(
        SQLEnum(MessageType), default=MessageType.TEXT, nullable=False
    )
    related_task_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, default=None)
    related_task_title: Mapped[Optional[str]] = mapped_column(String(200), nullable=True, default=None)
    related_task_status: Mapped[Optional[TaskStatus]] = mapped_column(
        SQLEnum(TaskStatus), nullable=True, default=None
    )
