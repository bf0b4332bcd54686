from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session
from typing import Dict

from roomiesync.database import get_db
from roomiesync.schemas.result import Result
from roomiesync.services.record_service import RecordService

router = APIRouter()


@router.get("/budgets", response_model=Result[Dict[str, float]])
async def get_budgets(db: Session = Depends(get_db)):
    """Category -> allocated amount."""
    service = RecordService(db)
    return Result.successful(data=service.get_budgets())


@router.post("/budgets", response_model=Result[Dict[str, float]])
async def replace_budgets(
    budgets: Dict[str, float] = Body(...),
    db: Session = Depends(get_db)
):
    """Replace the whole budget map with the posted one."""
    service = RecordService(db)
    return Result.successful(data=service.replace_budgets(budgets))


@router.get("/budget_labels", response_model=Result[Dict[str, str]])
async def get_budget_labels(db: Session = Depends(get_db)):
    """Category -> display label."""
    service = RecordService(db)
    return Result.successful(data=service.get_budget_labels())


@router.post("/budget_labels", response_model=Result[Dict[str, str]])
async def replace_budget_labels(
    labels: Dict[str, str] = Body(...),
    db: Session = Depends(get_db)
):
    """Replace the whole label map with the posted one."""
    service = RecordService(db)
    return Result.successful(data=service.replace_budget_labels(labels))
