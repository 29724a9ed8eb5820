"""
report_service.py — Date-ranged reports
Project time share, a contiguous daily series and a rollup summary for
the tasks scheduled inside an inclusive date range.
"""

import logging
from datetime import date

from sqlalchemy.orm import Session

from workbench.config import REPORT_HOURS_BASIS
from workbench.schemas import HoursBasis, ReportData
from workbench.services.project_service import ProjectService
from workbench.services.task_service import TaskService
from workbench.services.time_aggregator import (
    daily_series,
    date_range,
    project_time_stats,
    report_summary,
    resolve_basis,
)

logger = logging.getLogger(__name__)


def build_report(tasks, projects, start: date, end: date,
                 basis: HoursBasis = HoursBasis.PLANNED) -> ReportData:
    """Compose a report from an already selected set of tasks."""
    days = date_range(start, end)
    tasks = [t for t in tasks if t.date is not None and start <= t.date <= end]
    return ReportData(
        start_date=start,
        end_date=end,
        basis=basis,
        project_stats=project_time_stats(tasks, projects, basis),
        daily_stats=daily_series(tasks, days),
        summary=report_summary(tasks),
    )


class ReportService:
    @staticmethod
    def get_report(db: Session, start: date, end: date,
                   project_ids: list[int] | None = None,
                   basis: str | HoursBasis | None = None) -> ReportData:
        basis = resolve_basis(basis or REPORT_HOURS_BASIS)
        date_range(start, end)  # reject bad ranges before touching the store

        filters = {"start_date": start, "end_date": end}
        if project_ids:
            filters["project_ids"] = project_ids
        tasks = TaskService.get_all(db, filters)
        projects = ProjectService.get_all(db, include_archived=True)

        report = build_report(tasks, projects, start, end, basis)
        logger.info(
            f"Report {start}..{end} ({basis.value}): {report.summary.total_tasks} task(s), "
            f"{len(report.project_stats)} project group(s)"
        )
        return report
