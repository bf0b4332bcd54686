from sqlalchemy import String, Float
from sqlalchemy.orm import Mapped, mapped_column
from roomiesync.models.base import Base


class Budget(Base):
    """Amount allocated to one category. Replaced wholesale on save."""

    __tablename__ = "budgets"

    category: Mapped[str] = mapped_column(String(100), primary_key=True)
    amount: Mapped[float] = mapped_column(Float, nullable=False, default=0)


class BudgetLabel(Base):
    """Free-text label for one budget category."""

    __tablename__ = "budget_labels"

    category: Mapped[str] = mapped_column(String(100), primary_key=True)
    label: Mapped[str] = mapped_column(String(200), nullable=False, default="")
