from fastapi import APIRouter, Depends, status
from typing import Optional

from roomiesync.schemas.result import Result
from roomiesync.schemas.ai import (
    ParseExpenseRequest,
    ParsedExpense,
    ReminderRequest,
    ReminderResponse,
)
from roomiesync.services.ai_service import AIService

router = APIRouter()


def get_ai_service() -> AIService:
    return AIService()


@router.post("/parse-expense", response_model=Result[Optional[ParsedExpense]], status_code=status.HTTP_200_OK)
async def parse_expense(
    request: ParseExpenseRequest,
    ai_service: AIService = Depends(get_ai_service)
):
    """
    Extract title, amount and category from a free-text description.

    Best effort: `data` is null when nothing could be extracted.
    """
    parsed = ai_service.parse_expense_from_text(request.text)
    return Result.successful(data=parsed)


@router.post("/reminder", response_model=Result[ReminderResponse], status_code=status.HTTP_200_OK)
async def generate_reminder(
    request: ReminderRequest,
    ai_service: AIService = Depends(get_ai_service)
):
    """Short reminder for an overdue task; falls back to a canned message."""
    message = ai_service.generate_reminder_message(
        task_title=request.task_title,
        assignee_name=request.assignee_name,
        days_overdue=request.days_overdue,
    )
    return Result.successful(data=ReminderResponse(message=message))
