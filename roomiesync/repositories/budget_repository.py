from sqlalchemy.orm import Session
from sqlalchemy import select, delete
from typing import Dict
from roomiesync.models.budget import Budget, BudgetLabel


class BudgetRepository:
    """
    Category budgets and labels.

    Both maps are replaced wholesale: every save deletes the existing rows
    and reinserts the new map.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_budgets(self) -> Dict[str, float]:
        rows = self.db.execute(select(Budget)).scalars().all()
        return {row.category: row.amount for row in rows}

    def replace_budgets(self, budgets: Dict[str, float]) -> Dict[str, float]:
        self.db.execute(delete(Budget))
        self.db.add_all(
            Budget(category=category, amount=amount) for category, amount in budgets.items()
        )
        self.db.commit()
        return self.get_budgets()

    def get_labels(self) -> Dict[str, str]:
        rows = self.db.execute(select(BudgetLabel)).scalars().all()
        return {row.category: row.label for row in rows}

    def replace_labels(self, labels: Dict[str, str]) -> Dict[str, str]:
        self.db.execute(delete(BudgetLabel))
        self.db.add_all(
            BudgetLabel(category=category, label=label) for category, label in labels.items()
        )
        self.db.commit()
        return self.get_labels()
