"""
Chat feed entries derived from task events.

Task messages embed a TaskSnapshot taken at send time. When rendering, the
live task wins if it still exists; the snapshot is only a fallback.
"""

from datetime import datetime
from typing import Iterable, Optional

from roomiesync.models.message import MessageType
from roomiesync.models.task import TaskStatus
from roomiesync.schemas.message import SYSTEM_SENDER, ChatMessage, TaskSnapshot
from roomiesync.schemas.roommate import Roommate
from roomiesync.schemas.task import Task


def text_message(
    sender_id: Optional[str], content: str, timestamp: Optional[datetime] = None
) -> ChatMessage:
    data = dict(sender_id=sender_id or SYSTEM_SENDER, content=content)
    if timestamp is not None:
        data["timestamp"] = timestamp
    return ChatMessage(**data)


def task_assigned_message(
    task: Task,
    assignee: Optional[Roommate],
    sender_id: Optional[str],
    timestamp: Optional[datetime] = None,
) -> ChatMessage:
    assignee_name = assignee.name if assignee else "Unknown"
    return ChatMessage.with_snapshot(
        sender_id=sender_id or SYSTEM_SENDER,
        content=f'Assigned task "{task.title}" to {assignee_name}',
        type=MessageType.TASK_ASSIGNED,
        snapshot=TaskSnapshot(task_id=task.id, title=task.title, status=TaskStatus.PENDING),
        timestamp=timestamp,
    )


def task_completed_message(
    task: Task, sender_id: Optional[str], timestamp: Optional[datetime] = None
) -> ChatMessage:
    return ChatMessage.with_snapshot(
        sender_id=sender_id or SYSTEM_SENDER,
        content=f'Completed task "{task.title}"',
        type=MessageType.TASK_UPDATED,
        snapshot=TaskSnapshot(task_id=task.id, title=task.title, status=TaskStatus.COMPLETED),
        timestamp=timestamp,
    )


def completion_message_for(
    old_task: Optional[Task],
    new_task: Task,
    sender_id: Optional[str],
    timestamp: Optional[datetime] = None,
) -> Optional[ChatMessage]:
    """Message for a pending -> completed transition, None for anything else."""
    if old_task is None:
        return None
    if old_task.status != TaskStatus.COMPLETED and new_task.status == TaskStatus.COMPLETED:
        return task_completed_message(new_task, sender_id, timestamp)
    return None


def resolve_task_status(message: ChatMessage, tasks: Iterable[Task]) -> Optional[TaskStatus]:
    """Live status of the message's task, or the snapshot status if it is gone."""
    snapshot = message.snapshot
    if snapshot is None:
        return None
    live = next((t for t in tasks if t.id == snapshot.task_id), None)
    return live.status if live else snapshot.status
