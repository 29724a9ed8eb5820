"""
status_machine.py — Task lifecycle
planned -> in_progress -> completed, with completion allowed straight from
planned. Statuses outside the known set are kept as-is and treated as
not-yet-started, so rows written by newer versions still move forward.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from workbench.errors import ValidationError
from workbench.models.task import Task
from workbench.schemas import TaskStatus
from workbench.services.task_service import TaskService, check_hours

logger = logging.getLogger(__name__)


def known_status(raw: str | None) -> TaskStatus | None:
    """Map a stored status to the known enumeration, or None for anything else."""
    try:
        return TaskStatus(raw)
    except ValueError:
        return None


def is_completed(task) -> bool:
    return known_status(task.status) is TaskStatus.COMPLETED


def _now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class StatusMachine:
    @staticmethod
    def start(db: Session, task_id: int, actual_start: datetime | None = None) -> Task:
        """Begin work on a task; the first start time sticks."""
        task = TaskService.get_by_id(db, task_id)
        status = known_status(task.status)

        if status is TaskStatus.COMPLETED:
            raise ValidationError(f"Task {task_id} is already completed; reopen it first")
        if status is TaskStatus.IN_PROGRESS:
            return task

        # planned, or a status this version does not know
        start = task.actual_start or actual_start or _now()
        return TaskService.update_status(db, task_id, TaskStatus.IN_PROGRESS.value, actual_start=start)

    @staticmethod
    def complete(db: Session, task_id: int, actual_hours: float,
                 actual_start: datetime | None = None) -> Task:
        """Close a task with the effort actually spent.

        Completing an already completed task overwrites actual_hours, and
        actual_start when one is given.
        """
        actual_hours = check_hours(actual_hours, "actual_hours")

        task = TaskService.get_by_id(db, task_id)
        start = actual_start or task.actual_start or _now()
        if is_completed(task):
            logger.info(f"Task {task_id} re-completed, overwriting actual effort")
        return TaskService.update_status(
            db, task_id, TaskStatus.COMPLETED.value,
            actual_start=start, actual_hours=actual_hours,
        )

    @staticmethod
    def reopen(db: Session, task_id: int) -> Task:
        """Send a completed task back to planned, clearing logged hours."""
        task = TaskService.get_by_id(db, task_id)
        if not is_completed(task):
            raise ValidationError(f"Task {task_id} is not completed")
        return TaskService.update_status(db, task_id, TaskStatus.PLANNED.value, actual_hours=0.0)
