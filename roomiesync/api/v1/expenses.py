from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from roomiesync.database import get_db
from roomiesync.schemas.result import Result
from roomiesync.schemas.expense import Expense
from roomiesync.services.record_service import RecordService

router = APIRouter()


@router.get("", response_model=Result[List[Expense]])
async def list_expenses(db: Session = Depends(get_db)):
    """Get the full ledger, oldest entry first."""
    service = RecordService(db)
    return Result.successful(data=service.list_expenses())


@router.post("", response_model=Result[Expense], status_code=status.HTTP_201_CREATED)
async def add_expense(expense: Expense, db: Session = Depends(get_db)):
    """
    Append an expense or contribution.

    The ledger is append-only: posting an id that already exists returns
    the stored entry unchanged.
    """
    service = RecordService(db)
    return Result.successful(data=service.add_expense(expense))
