import asyncio
import logging
import math
from datetime import date, datetime, time, timezone
from typing import Any, Awaitable, Dict, Optional

from roomiesync.core.exception import (
    AuthorizationException,
    BadRequestException,
    ResourceNotFoundException,
)
from roomiesync.models.expense import ExpenseCategory
from roomiesync.models.task import TaskStatus
from roomiesync.schemas.ai import ExpenseDraft
from roomiesync.schemas.expense import Expense, ExpenseCreate
from roomiesync.schemas.roommate import Roommate, RoommateCreate, avatar_url_for
from roomiesync.schemas.state import AppState
from roomiesync.schemas.task import Task, TaskCreate
from roomiesync.services import chat_service, ledger_service, report_service
from roomiesync.services.ai_service import REMINDER_FALLBACK, AIService
from roomiesync.storage.interface import StorageBackend, StorageError

logger = logging.getLogger(__name__)

RENT_TITLE = "Monthly Rent/Contribution"


class HouseholdService:
    """
    Application controller for one household client.

    Holds the current AppState snapshot. Every action persists the affected
    collection first and only then swaps in a new snapshot, so a failed
    write leaves `state` exactly as it was.
    """

    def __init__(self, storage: StorageBackend, ai: Optional[AIService] = None):
        self.storage = storage
        self.ai = ai
        self.state = AppState()

    # ===== Loading & session =====

    async def load(self) -> AppState:
        """Load every collection concurrently. Any storage failure yields an empty state."""
        try:
            (
                current_user,
                roommates,
                expenses,
                tasks,
                messages,
                budgets,
                labels,
            ) = await asyncio.gather(
                self.storage.get_current_user(),
                self.storage.get_roommates(),
                self.storage.get_expenses(),
                self.storage.get_tasks(),
                self.storage.get_messages(),
                self.storage.get_budgets(),
                self.storage.get_budget_labels(),
            )
        except StorageError as e:
            logger.error(f"Failed to load application data: {e}")
            self.state = AppState()
            return self.state

        self.state = AppState(
            current_user=current_user,
            roommates=roommates,
            expenses=expenses,
            tasks=tasks,
            messages=messages,
            category_budgets=budgets,
            category_labels=labels,
        )
        return self.state

    async def login(self, user_id: str) -> Roommate:
        user = self.state.find_roommate(user_id)
        if user is None:
            raise ResourceNotFoundException("Roommate", user_id)

        await self._persist(self.storage.save_current_user(user))
        self._update(current_user=user)
        logger.info(f"{user.name} logged in")
        return user

    async def logout(self) -> None:
        await self._persist(self.storage.save_current_user(None))
        self._update(current_user=None)

    # ===== Roommates =====

    async def add_roommate(self, data: RoommateCreate) -> Roommate:
        self._require_admin()

        roommate = Roommate(
            **data.model_dump(exclude={"avatar_url"}),
            avatar_url=data.avatar_url or avatar_url_for(data.name),
        )
        roommates = [*self.state.roommates, roommate]
        await self._persist(self.storage.save_roommates(roommates))
        self._update(roommates=roommates)
        return roommate

    async def delete_roommate(self, roommate_id: str) -> None:
        admin = self._require_admin()
        if roommate_id == admin.id:
            raise BadRequestException("You cannot remove yourself from the household")
        if self.state.find_roommate(roommate_id) is None:
            raise ResourceNotFoundException("Roommate", roommate_id)

        roommates = [r for r in self.state.roommates if r.id != roommate_id]
        await self._persist(self.storage.save_roommates(roommates))
        self._update(roommates=roommates)

    # ===== Ledger =====

    async def add_expense(self, data: ExpenseCreate) -> Expense:
        fields = data.model_dump(exclude_none=True)
        if data.category == ExpenseCategory.CONTRIBUTION.value:
            # A contribution is the payer's own money into the pool.
            fields["split_among"] = [data.paid_by]

        expense = Expense(**fields)
        expenses = [*self.state.expenses, expense]
        await self._persist(self.storage.save_expenses(expenses))
        self._update(expenses=expenses)
        return expense

    async def quick_add_rent(self, user_id: str, amount: Optional[float] = None) -> Optional[Expense]:
        """Record a roommate's monthly contribution. Unknown ids and zero amounts are ignored."""
        payer = self.state.find_roommate(user_id)
        if payer is None:
            logger.warning(f"Quick rent skipped: roommate {user_id} not found")
            return None

        if amount is None:
            amount = payer.agreed_contribution
        if amount <= 0:
            logger.warning(f"Quick rent skipped: nothing to collect from {payer.name}")
            return None

        expense = await self.add_expense(
            ExpenseCreate(
                title=RENT_TITLE,
                amount=amount,
                paid_by=payer.id,
                category=ExpenseCategory.CONTRIBUTION.value,
            )
        )
        logger.info(f"Collected {expense.amount} from {payer.name}")
        return expense

    async def update_budgets(self, budgets: Dict[str, float], labels: Dict[str, str]) -> None:
        """Budgets and labels are saved as one unit; both maps are replaced."""
        self._require_admin()

        await self._persist(self.storage.save_budgets(budgets))
        await self._persist(self.storage.save_budget_labels(labels))
        self._update(category_budgets=dict(budgets), category_labels=dict(labels))

    async def parse_expense(self, text: str) -> Optional[ExpenseDraft]:
        """Pre-fill an expense form from free text. None when nothing could be parsed."""
        if self.ai is None:
            return None

        parsed = await asyncio.to_thread(self.ai.parse_expense_from_text, text)
        if parsed is None:
            return None

        category = parsed.category or ExpenseCategory.OTHER.value
        return ExpenseDraft(
            title=parsed.title or "",
            amount=parsed.amount,
            category=category,
            split_among=ledger_service.default_split(category, self.state.roommates),
        )

    # ===== Tasks & chat =====

    async def add_task(self, data: TaskCreate) -> Task:
        task = Task(**data.model_dump())
        tasks = [*self.state.tasks, task]
        await self._persist(self.storage.save_tasks(tasks))
        self._update(tasks=tasks)

        message = chat_service.task_assigned_message(
            task, self.state.find_roommate(task.assigned_to), self._sender_id()
        )
        await self._append_message(message)
        return task

    async def update_task(self, task: Task) -> Task:
        old_task = self.state.find_task(task.id)
        if old_task is None:
            raise ResourceNotFoundException("Task", task.id)

        tasks = [task if t.id == task.id else t for t in self.state.tasks]
        await self._persist(self.storage.save_tasks(tasks))
        self._update(tasks=tasks)

        message = chat_service.completion_message_for(old_task, task, self._sender_id())
        if message is not None:
            await self._append_message(message)
        return task

    async def complete_task(self, task_id: str) -> Task:
        task = self.state.find_task(task_id)
        if task is None:
            raise ResourceNotFoundException("Task", task_id)
        if task.is_completed:
            return task
        return await self.update_task(task.model_copy(update={"status": TaskStatus.COMPLETED}))

    async def send_reminder(self, task_id: str, now: Optional[datetime] = None) -> str:
        """Generate a reminder for the assignee and stamp the task's lastReminded."""
        task = self.state.find_task(task_id)
        if task is None:
            raise ResourceNotFoundException("Task", task_id)

        now = now or datetime.now(timezone.utc)
        assignee = self.state.find_roommate(task.assigned_to)
        assignee_name = assignee.name if assignee else "Roommate"
        days = days_overdue(task.due_date, now)

        if self.ai is None:
            message = REMINDER_FALLBACK
        else:
            message = await asyncio.to_thread(
                self.ai.generate_reminder_message, task.title, assignee_name, days
            )

        await self.update_task(task.model_copy(update={"last_reminded": now}))
        logger.info(f"Reminder sent to {assignee_name} for task {task.id}")
        return message

    async def send_message(self, text: str) -> None:
        if self.state.current_user is None or not text.strip():
            return
        await self._append_message(
            chat_service.text_message(self.state.current_user.id, text)
        )

    # ===== Backup & reports =====

    def export_backup(self, exported_at: Optional[datetime] = None) -> dict:
        return report_service.build_backup(self.state, exported_at)

    async def import_backup(self, raw: Any) -> AppState:
        """
        Replace every collection with the contents of a backup.

        Raises:
            BadRequestException: If the backup is malformed; state is untouched
        """
        bundle = report_service.parse_backup(raw)

        await self._persist(self.storage.save_roommates(bundle.roommates))
        await self._persist(self.storage.save_expenses(bundle.expenses))
        await self._persist(self.storage.save_tasks(bundle.tasks))
        await self._persist(self.storage.save_messages(bundle.messages))
        await self._persist(self.storage.save_budgets(bundle.budgets))
        await self._persist(self.storage.save_budget_labels(bundle.budget_labels))

        self._update(
            roommates=bundle.roommates,
            expenses=bundle.expenses,
            tasks=bundle.tasks,
            messages=bundle.messages,
            category_budgets=bundle.budgets,
            category_labels=bundle.budget_labels,
        )
        logger.info(f"Restored backup with {len(bundle.roommates)} roommates")
        return self.state

    def monthly_report(self, month: str) -> str:
        return report_service.build_monthly_report(
            self.state.expenses, self.state.roommates, month
        )

    # ===== Helper Methods =====

    def _update(self, **changes) -> None:
        self.state = self.state.model_copy(update=changes)

    def _sender_id(self) -> Optional[str]:
        return self.state.current_user.id if self.state.current_user else None

    def _require_admin(self) -> Roommate:
        user = self.state.current_user
        if user is None or not user.is_admin:
            raise AuthorizationException("Only an admin can manage the household")
        return user

    async def _append_message(self, message) -> None:
        messages = [*self.state.messages, message]
        await self._persist(self.storage.save_messages(messages))
        self._update(messages=messages)

    async def _persist(self, operation: Awaitable[None]) -> None:
        try:
            await operation
        except StorageError as e:
            logger.error(f"Failed to persist household data: {e}")
            raise


def days_overdue(due_date: date, now: datetime) -> int:
    """Whole days past the due date, rounded up, never less than 1."""
    due = datetime.combine(due_date, time.min, tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    days = math.ceil((now - due).total_seconds() / 86400)
    return days if days > 0 else 1
