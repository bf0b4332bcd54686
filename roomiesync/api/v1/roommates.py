from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from roomiesync.database import get_db
from roomiesync.schemas.result import Result
from roomiesync.schemas.roommate import Roommate
from roomiesync.services.record_service import RecordService

router = APIRouter()


@router.get("", response_model=Result[List[Roommate]])
async def list_roommates(db: Session = Depends(get_db)):
    """Get every roommate in the household."""
    service = RecordService(db)
    return Result.successful(data=service.list_roommates())


@router.post("", response_model=Result[Roommate], status_code=status.HTTP_201_CREATED)
async def save_roommate(roommate: Roommate, db: Session = Depends(get_db)):
    """Insert a roommate, or overwrite the existing one with the same id."""
    service = RecordService(db)
    return Result.successful(data=service.upsert_roommate(roommate))


@router.delete("/{roommate_id}", response_model=Result[dict])
async def delete_roommate(roommate_id: str, db: Session = Depends(get_db)):
    service = RecordService(db)
    service.delete_roommate(roommate_id)
    return Result.successful(data={"message": "Roommate deleted successfully"})
