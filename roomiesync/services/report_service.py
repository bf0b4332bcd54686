"""
Backup bundles and monthly CSV reports.
"""

import csv
import json
import logging
from datetime import date, datetime, timezone
from io import StringIO
from typing import Any, Iterable, Optional, Sequence

from pydantic import ValidationError

from roomiesync.config import settings
from roomiesync.core.exception import BadRequestException
from roomiesync.schemas.backup import BackupBundle
from roomiesync.schemas.expense import Expense
from roomiesync.schemas.roommate import Roommate
from roomiesync.schemas.state import AppState
from roomiesync.services import ledger_service

logger = logging.getLogger(__name__)


def build_backup(state: AppState, exported_at: Optional[datetime] = None) -> dict:
    """Bundle the five collections into one JSON-ready document."""
    bundle = BackupBundle(
        roommates=state.roommates,
        expenses=state.expenses,
        tasks=state.tasks,
        messages=state.messages,
        budgets=state.category_budgets,
        budget_labels=state.category_labels,
        exported_at=exported_at or datetime.now(timezone.utc),
    )
    return bundle.to_json()


def parse_backup(raw: str | bytes | dict[str, Any]) -> BackupBundle:
    """
    Validate a backup document.

    Only `roommates` is mandatory; the other collections default to empty.

    Raises:
        BadRequestException: If the document is not a valid backup
    """
    try:
        data = raw if isinstance(raw, dict) else json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error(f"Backup is not valid JSON: {e}")
        raise BadRequestException("Invalid backup file format")

    if not isinstance(data, dict) or not isinstance(data.get("roommates"), list):
        raise BadRequestException("Invalid backup file format")

    try:
        return BackupBundle.model_validate(data)
    except ValidationError as e:
        logger.error(f"Backup failed validation: {e}")
        raise BadRequestException("Invalid backup file format")


def backup_filename(today: Optional[date] = None) -> str:
    return f"RoomieSync_Backup_{(today or date.today()).isoformat()}.json"


def report_filename(month: str) -> str:
    return f"RoomieSync_Report_{month}.csv"


def parse_month(month: str) -> tuple[int, int]:
    """Parse a YYYY-MM string into (year, month)."""
    try:
        year_str, month_str = month.split("-")
        year, month_num = int(year_str), int(month_str)
    except ValueError:
        raise BadRequestException(f"Invalid month '{month}', expected YYYY-MM")
    if not 1 <= month_num <= 12:
        raise BadRequestException(f"Invalid month '{month}', expected YYYY-MM")
    return year, month_num


def _money(amount: float) -> str:
    value = int(amount) if float(amount).is_integer() else round(amount, 2)
    return f"{settings.CURRENCY_PREFIX} {value}"


def build_monthly_report(
    expenses: Sequence[Expense], roommates: Iterable[Roommate], month: str
) -> str:
    """
    CSV summary of one calendar month: totals, category breakdown and
    every transaction.

    Raises:
        BadRequestException: If the month string is malformed or the month
            has no transactions
    """
    year, month_num = parse_month(month)
    summary = ledger_service.monthly_summary(expenses, year, month_num)
    if not summary.transactions:
        raise BadRequestException(f"No transactions found for {summary.month_name}")

    names = {r.id: r.name for r in roommates}
    buffer = StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    writer.writerow([f"ROOMIESYNC MONTHLY REPORT - {summary.month_name.upper()}"])
    writer.writerow([])

    writer.writerow(["SUMMARY"])
    writer.writerow(["Total Collected", _money(summary.total_in)])
    writer.writerow(["Total Spent", _money(summary.total_out)])
    writer.writerow(["Net Balance for Month", _money(summary.net)])
    writer.writerow([])

    writer.writerow(["CATEGORY BREAKDOWN"])
    writer.writerow(["Category", "Spent"])
    for category, amount in summary.category_breakdown.items():
        writer.writerow([category, _money(amount)])
    writer.writerow([])

    writer.writerow(["TRANSACTION DETAILS"])
    writer.writerow(["Date", "Title", "Category", "Paid By", "Amount", "Type"])
    for expense in summary.transactions:
        writer.writerow([
            expense.date.date().isoformat(),
            expense.title,
            expense.category,
            names.get(expense.paid_by, "Unknown"),
            _money(expense.amount),
            "INCOME" if expense.is_contribution else "EXPENSE",
        ])

    return buffer.getvalue()
