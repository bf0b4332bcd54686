from sqlalchemy import String, Date, DateTime, Text, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column
from typing import Optional
from datetime import date, datetime
import enum
from roomiesync.models.base import BaseModel


class TaskStatus(str, enum.Enum):
    """Chore status"""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"


class Task(BaseModel):
    """Household chore assigned to a roommate."""

    __tablename__ = "tasks"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    assigned_to: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    due_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[TaskStatus] = mapped_column(
        SQLEnum(TaskStatus), default=TaskStatus.PENDING, nullable=False
    )
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)
    last_reminded: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )
