from roomiesync.models.base import Base, BaseModel
from roomiesync.models.roommate import Roommate, Role
from roomiesync.models.expense import Expense, ExpenseCategory
from roomiesync.models.task import Task, TaskStatus
from roomiesync.models.message import Message, MessageType
from roomiesync.models.budget import Budget, BudgetLabel

__all__ = [
    # Base
    "Base",
    "BaseModel",
    # Roommate
    "Roommate",
    "Role",
    # Expense
    "Expense",
    "ExpenseCategory",
    # Task
    "Task",
    "TaskStatus",
    # Chat
    "Message",
    "MessageType",
    # Budget
    "Budget",
    "BudgetLabel",
]
