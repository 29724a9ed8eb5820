from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from workbench.database import get_db
from workbench.errors import WorkbenchError
from workbench.routes import http_error
from workbench.schemas import ReportData, WorkbenchData
from workbench.services.report_service import ReportService
from workbench.services.workbench_service import WorkbenchService

router = APIRouter(prefix="/api/v1", tags=["Reports"])


@router.get("/workbench", response_model=WorkbenchData)
def get_workbench(today: Optional[date] = None, db: Session = Depends(get_db)):
    try:
        return WorkbenchService.get(db, today)
    except WorkbenchError as e:
        raise http_error(e)


@router.get("/reports", response_model=ReportData)
def get_report(
    start_date: date,
    end_date: date,
    project_id: Optional[list[int]] = Query(default=None),
    basis: Optional[str] = None,
    db: Session = Depends(get_db),
):
    try:
        return ReportService.get_report(db, start_date, end_date, project_id, basis)
    except WorkbenchError as e:
        raise http_error(e)
