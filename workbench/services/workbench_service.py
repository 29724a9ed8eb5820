"""
workbench_service.py — The "today" dashboard
Today's scheduled tasks plus the counters shown above them.
"""

from collections.abc import Iterable
from datetime import date

from sqlalchemy.orm import Session

from workbench.schemas import TaskOut, WorkbenchData
from workbench.services.status_machine import is_completed
from workbench.services.task_service import TaskService


def _day_order(task):
    # by start time with unscheduled times last, then creation order
    return (
        task.start_time is None,
        task.start_time or "",
        task.created_at is None,
        task.created_at.timestamp() if task.created_at else 0.0,
        task.id or 0,
    )


def build_workbench(tasks: Iterable, today: date, backlog_count: int | None = None) -> WorkbenchData:
    """Snapshot of the tasks scheduled for today. Input is not modified."""
    tasks = list(tasks)
    todays = sorted((t for t in tasks if t.date is not None and t.date == today), key=_day_order)
    if backlog_count is None:
        backlog_count = sum(1 for t in tasks if t.date is None)

    completed = [t for t in todays if is_completed(t)]
    return WorkbenchData(
        today=today,
        today_tasks=[TaskOut.model_validate(t) for t in todays],
        total_count=len(todays),
        completed_count=len(completed),
        pending_count=len(todays) - len(completed),
        planned_hours=round(sum(float(t.hours or 0.0) for t in todays), 2),
        completed_hours=round(sum(float(t.actual_hours or 0.0) for t in completed), 2),
        backlog_count=backlog_count,
    )


class WorkbenchService:
    @staticmethod
    def get(db: Session, today: date | None = None) -> WorkbenchData:
        today = today or date.today()
        tasks = TaskService.get_by_date(db, today)
        return build_workbench(tasks, today, backlog_count=TaskService.count_backlog(db))
