from sqlalchemy import String, Float, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from typing import List
from datetime import datetime
import enum
from roomiesync.models.base import BaseModel


class ExpenseCategory(str, enum.Enum):
    """Standard expense categories"""

    # Money paid into the pool rather than spent from it
    CONTRIBUTION = "Contribution"
    RENT = "Rent"
    GROCERY = "Grocery"
    VEG = "Vegetables"
    NON_VEG = "Non-Veg"
    PETROL = "Petrol"
    UTILITIES = "Utilities"
    OTHER = "Other"


class Expense(BaseModel):
    """
    Append-only ledger entry.

    The category is stored as plain text so custom budget keys
    survive alongside the standard categories.
    """

    __tablename__ = "expenses"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    paid_by: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    split_among: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
