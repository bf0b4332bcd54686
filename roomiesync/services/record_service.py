import logging
from sqlalchemy.orm import Session
from typing import Dict, List

from roomiesync.repositories.roommate_repository import RoommateRepository
from roomiesync.repositories.expense_repository import ExpenseRepository
from roomiesync.repositories.task_repository import TaskRepository
from roomiesync.repositories.message_repository import MessageRepository
from roomiesync.repositories.budget_repository import BudgetRepository
from roomiesync.schemas.roommate import Roommate
from roomiesync.schemas.expense import Expense
from roomiesync.schemas.task import Task, TaskStatusUpdate
from roomiesync.schemas.message import ChatMessage
from roomiesync.schemas.ledger import LedgerSummary
from roomiesync.services import ledger_service, report_service
from roomiesync.core.exception import ResourceNotFoundException

logger = logging.getLogger(__name__)


def _columns(record) -> dict:
    """Schema -> column values (snake_case, python types)."""
    return record.model_dump()


class RecordService:
    """
    Service layer behind the remote CRUD routes.

    The routes are a passthrough for the household client: write semantics
    differ per collection (upsert, append-only or wholesale replace) to
    match what the client's remote storage backend expects.
    """

    def __init__(self, db: Session):
        self.db = db
        self.roommate_repo = RoommateRepository(db)
        self.expense_repo = ExpenseRepository(db)
        self.task_repo = TaskRepository(db)
        self.message_repo = MessageRepository(db)
        self.budget_repo = BudgetRepository(db)

    # ===== Roommates =====

    def list_roommates(self) -> List[Roommate]:
        return [Roommate.model_validate(r) for r in self.roommate_repo.get_all()]

    def upsert_roommate(self, roommate: Roommate) -> Roommate:
        saved = self.roommate_repo.upsert(_columns(roommate))
        return Roommate.model_validate(saved)

    def delete_roommate(self, roommate_id: str) -> None:
        """
        Raises:
            ResourceNotFoundException: If no roommate has this id
        """
        if not self.roommate_repo.delete(roommate_id):
            raise ResourceNotFoundException("Roommate", roommate_id)
        logger.info(f"Deleted roommate {roommate_id}")

    # ===== Expenses =====

    def list_expenses(self) -> List[Expense]:
        return [Expense.model_validate(e) for e in self.expense_repo.get_all()]

    def add_expense(self, expense: Expense) -> Expense:
        saved = self.expense_repo.insert_if_absent(_columns(expense))
        return Expense.model_validate(saved)

    # ===== Tasks =====

    def list_tasks(self) -> List[Task]:
        return [Task.model_validate(t) for t in self.task_repo.get_all()]

    def upsert_task(self, task: Task) -> Task:
        saved = self.task_repo.upsert(_columns(task))
        return Task.model_validate(saved)

    def update_task_status(self, task_id: str, data: TaskStatusUpdate) -> Task:
        """
        Raises:
            ResourceNotFoundException: If no task has this id
        """
        task = self.task_repo.update_status(task_id, data.status, data.last_reminded)
        if task is None:
            raise ResourceNotFoundException("Task", task_id)
        return Task.model_validate(task)

    # ===== Messages =====

    def list_messages(self) -> List[ChatMessage]:
        return [ChatMessage.model_validate(m) for m in self.message_repo.get_all()]

    def add_message(self, message: ChatMessage) -> ChatMessage:
        saved = self.message_repo.insert_if_absent(_columns(message))
        return ChatMessage.model_validate(saved)

    # ===== Budgets =====

    def get_budgets(self) -> Dict[str, float]:
        return self.budget_repo.get_budgets()

    def replace_budgets(self, budgets: Dict[str, float]) -> Dict[str, float]:
        return self.budget_repo.replace_budgets(budgets)

    def get_budget_labels(self) -> Dict[str, str]:
        return self.budget_repo.get_labels()

    def replace_budget_labels(self, labels: Dict[str, str]) -> Dict[str, str]:
        return self.budget_repo.replace_labels(labels)

    # ===== Ledger =====

    def ledger_summary(self) -> LedgerSummary:
        return ledger_service.summarize(
            self.list_roommates(),
            self.list_expenses(),
            self.get_budgets(),
            self.get_budget_labels(),
        )

    def monthly_report(self, month: str) -> str:
        """
        Raises:
            BadRequestException: If the month is malformed or has no transactions
        """
        return report_service.build_monthly_report(
            self.list_expenses(), self.list_roommates(), month
        )
