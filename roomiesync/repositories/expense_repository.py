from sqlalchemy.orm import Session
from sqlalchemy import select
from typing import List
from roomiesync.models.expense import Expense
from roomiesync.repositories.repository import BaseRepository


class ExpenseRepository(BaseRepository[Expense]):
    """Repository for the append-only expense ledger."""

    def __init__(self, db: Session):
        super().__init__(Expense, db)

    def get_all(self) -> List[Expense]:
        """All ledger entries, oldest first."""
        stmt = select(Expense).order_by(Expense.date.asc())
        return list(self.db.execute(stmt).scalars().all())
