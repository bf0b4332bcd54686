from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from roomiesync.database import get_db
from roomiesync.schemas.result import Result
from roomiesync.schemas.task import Task, TaskStatusUpdate
from roomiesync.services.record_service import RecordService

router = APIRouter()


@router.get("", response_model=Result[List[Task]])
async def list_tasks(db: Session = Depends(get_db)):
    service = RecordService(db)
    return Result.successful(data=service.list_tasks())


@router.post("", response_model=Result[Task], status_code=status.HTTP_201_CREATED)
async def save_task(task: Task, db: Session = Depends(get_db)):
    """Insert a task, or overwrite the existing one with the same id."""
    service = RecordService(db)
    return Result.successful(data=service.upsert_task(task))


@router.put("/{task_id}", response_model=Result[Task])
async def update_task_status(
    task_id: str,
    update: TaskStatusUpdate,
    db: Session = Depends(get_db)
):
    """
    Update a task's status and, optionally, when it was last reminded.

    - **status**: PENDING or COMPLETED
    - **lastReminded**: ISO timestamp; omitted keeps the stored value
    """
    service = RecordService(db)
    return Result.successful(data=service.update_task_status(task_id, update))
