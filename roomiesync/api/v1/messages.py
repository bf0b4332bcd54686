from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from roomiesync.database import get_db
from roomiesync.schemas.result import Result
from roomiesync.schemas.message import ChatMessage
from roomiesync.services.record_service import RecordService

router = APIRouter()


@router.get("", response_model=Result[List[ChatMessage]])
async def list_messages(db: Session = Depends(get_db)):
    """Get the chat feed in chronological order."""
    service = RecordService(db)
    return Result.successful(data=service.list_messages())


@router.post("", response_model=Result[ChatMessage], status_code=status.HTTP_201_CREATED)
async def add_message(message: ChatMessage, db: Session = Depends(get_db)):
    """Append a chat message. Re-posting a stored id is a no-op."""
    service = RecordService(db)
    return Result.successful(data=service.add_message(message))
