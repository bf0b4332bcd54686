from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from roomiesync.database import get_db
from roomiesync.schemas.result import Result
from roomiesync.schemas.ledger import LedgerSummary
from roomiesync.services.record_service import RecordService
from roomiesync.services.report_service import report_filename

router = APIRouter()


@router.get("/summary", response_model=Result[LedgerSummary])
async def get_ledger_summary(db: Session = Depends(get_db)):
    """
    Pool balance, per-person dues and budget health computed from every
    stored roommate, expense and budget.
    """
    service = RecordService(db)
    return Result.successful(data=service.ledger_summary())


@router.get("/report")
async def download_monthly_report(
    month: str = Query(..., pattern=r"^\d{4}-\d{2}$", description="Calendar month as YYYY-MM"),
    db: Session = Depends(get_db)
):
    """
    Monthly CSV report as a file download.

    Returns 400 wrapped in a Result when the month has no transactions.
    """
    service = RecordService(db)
    csv_text = service.monthly_report(month)
    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{report_filename(month)}"'},
    )
