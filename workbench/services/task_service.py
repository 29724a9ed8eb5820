"""
task_service.py — Task management
Handles CRUD for Tasks, rescheduling, the backlog, and the raw status
write that the status machine builds on.
"""

import logging
import math
import re
from datetime import date, datetime

from sqlalchemy.orm import Session, joinedload
from sqlalchemy import or_, asc

from workbench.database import store_guard
from workbench.errors import NotFound, ValidationError
from workbench.models.project import Project
from workbench.models.task import Task
from workbench.schemas import LEVEL_ORDER, TaskStatus

logger = logging.getLogger(__name__)

_CLOCK_RE = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


def _clock_minutes(value: str | None) -> int | None:
    """'HH:MM' -> minutes after midnight, None if malformed."""
    if not value:
        return None
    m = _CLOCK_RE.match(value.strip())
    if not m:
        return None
    return int(m.group(1)) * 60 + int(m.group(2))


def calculate_hours(start_time: str | None, end_time: str | None) -> float:
    """Planned hours between two HH:MM marks, crossing midnight if needed.

    Rounded to one decimal. Malformed input yields 0.
    """
    start = _clock_minutes(start_time)
    end = _clock_minutes(end_time)
    if start is None or end is None:
        return 0.0
    minutes = end - start
    if minutes < 0:
        minutes += 24 * 60
    return round(minutes / 60.0, 1)


def check_hours(value, field: str = "hours") -> float:
    """A finite, non-negative number of hours."""
    try:
        hours = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number")
    if not math.isfinite(hours) or hours < 0:
        raise ValidationError(f"{field} must be a finite number >= 0")
    return hours


def _check_clock(value, field: str):
    if value in (None, ""):
        return None
    if _clock_minutes(value) is None:
        raise ValidationError(f"{field} must be HH:MM")
    return value.strip()


def _check_level(value, field: str) -> str:
    value = (value or "medium").strip().lower()
    if value not in LEVEL_ORDER:
        raise ValidationError(f"{field} must be one of {', '.join(LEVEL_ORDER)}")
    return value


class TaskService:
    @staticmethod
    def _check_project(db: Session, project_id):
        if project_id is not None and db.get(Project, project_id) is None:
            raise NotFound("Project", project_id)

    @staticmethod
    def create(db: Session, data: dict) -> Task:
        """Create a task in planned status with no actual time logged."""
        with store_guard(db, "Create task"):
            name = (data.get("name") or "").strip()
            if not name:
                raise ValidationError("Task name must not be empty")
            start_time = _check_clock(data.get("start_time"), "start_time")
            end_time = _check_clock(data.get("end_time"), "end_time")
            if data.get("hours") is not None:
                hours = check_hours(data["hours"])
            else:
                hours = calculate_hours(start_time, end_time)
            TaskService._check_project(db, data.get("project_id"))

            task = Task(
                project_id=data.get("project_id"),
                name=name,
                description=data.get("description") or "",
                date=data.get("date"),
                start_time=start_time,
                end_time=end_time,
                hours=hours,
                deadline=data.get("deadline"),
                priority=_check_level(data.get("priority"), "priority"),
                urgency=_check_level(data.get("urgency"), "urgency"),
                status=TaskStatus.PLANNED.value,
                actual_start=None,
                actual_hours=0.0,
            )
            db.add(task)
            db.commit()
            db.refresh(task)
        logger.info(f"Created task {task.name!r} (id={task.id})")
        return task

    @staticmethod
    def get_all(db: Session, filters: dict = None) -> list[Task]:
        """Query with filters.

        Supported keys: date, start_date, end_date, project_ids (0 selects
        unassigned tasks), project_id, status, backlog (True = undated only).
        """
        filters = filters or {}
        with store_guard(db, "List tasks"):
            query = db.query(Task).options(joinedload(Task.project))

            if "date" in filters:
                query = query.filter(Task.date == filters["date"])
            if filters.get("start_date") is not None:
                query = query.filter(Task.date >= filters["start_date"])
            if filters.get("end_date") is not None:
                query = query.filter(Task.date <= filters["end_date"])
            if filters.get("backlog"):
                query = query.filter(Task.date.is_(None))
            if "project_id" in filters:
                pid = filters["project_id"]
                # 0 means unassigned, same as project_ids
                query = query.filter(Task.project_id.is_(None) if not pid else Task.project_id == pid)
            if filters.get("project_ids"):
                ids = [int(i) for i in filters["project_ids"]]
                clauses = [Task.project_id.in_([i for i in ids if i != 0])]
                if 0 in ids:
                    clauses.append(Task.project_id.is_(None))
                query = query.filter(or_(*clauses))
            if "status" in filters:
                query = query.filter(Task.status == filters["status"])

            return query.order_by(asc(Task.date), asc(Task.start_time), asc(Task.created_at), asc(Task.id)).all()

    @staticmethod
    def get_by_date(db: Session, day: date) -> list[Task]:
        return TaskService.get_all(db, {"date": day})

    @staticmethod
    def get_backlog(db: Session) -> list[Task]:
        """Tasks with no scheduled day."""
        return TaskService.get_all(db, {"backlog": True})

    @staticmethod
    def count_backlog(db: Session) -> int:
        with store_guard(db, "Count backlog"):
            return db.query(Task).filter(Task.date.is_(None)).count()

    @staticmethod
    def get_by_id(db: Session, task_id: int) -> Task:
        with store_guard(db, "Load task"):
            task = db.get(Task, task_id)
            if task is None:
                raise NotFound("Task", task_id)
            return task

    @staticmethod
    def update(db: Session, task_id: int, data: dict) -> Task:
        """Edit fields other than status. Only keys present in data change."""
        with store_guard(db, "Update task"):
            task = db.get(Task, task_id)
            if task is None:
                raise NotFound("Task", task_id)

            changes = {}
            if "name" in data:
                name = (data["name"] or "").strip()
                if not name:
                    raise ValidationError("Task name must not be empty")
                changes["name"] = name
            if "project_id" in data:
                TaskService._check_project(db, data["project_id"])
                changes["project_id"] = data["project_id"]
            for key in ("start_time", "end_time"):
                if key in data:
                    changes[key] = _check_clock(data[key], key)
            if data.get("hours") is not None:
                changes["hours"] = check_hours(data["hours"])
            elif "start_time" in changes or "end_time" in changes:
                start = changes.get("start_time", task.start_time)
                end = changes.get("end_time", task.end_time)
                if start and end:
                    changes["hours"] = calculate_hours(start, end)
            for key in ("priority", "urgency"):
                if data.get(key) is not None:
                    changes[key] = _check_level(data[key], key)
            for key in ("date", "deadline"):
                if key in data:
                    changes[key] = data[key]
            if data.get("description") is not None:
                changes["description"] = data["description"]

            for key, value in changes.items():
                setattr(task, key, value)
            db.commit()
            db.refresh(task)
        logger.info(f"Updated task id={task_id}")
        return task

    @staticmethod
    def assign_date(db: Session, task_id: int, day: date | None) -> Task:
        """Reschedule a task; None moves it back to the backlog."""
        task = TaskService.update(db, task_id, {"date": day})
        logger.info(f"Task {task_id} scheduled for {day or 'backlog'}")
        return task

    @staticmethod
    def update_status(db: Session, task_id: int, status: str,
                      actual_start: datetime | None = None,
                      actual_hours: float | None = None) -> Task:
        """Single read-modify-write of status and actual effort, one commit."""
        if not status:
            raise ValidationError("status must not be empty")
        if actual_hours is not None:
            actual_hours = check_hours(actual_hours, "actual_hours")
        with store_guard(db, "Update task status"):
            task = db.get(Task, task_id)
            if task is None:
                raise NotFound("Task", task_id)
            task.status = status
            if actual_start is not None:
                task.actual_start = actual_start
            if actual_hours is not None:
                task.actual_hours = actual_hours
            db.commit()
            db.refresh(task)
        logger.info(f"Task {task_id} status is now {status}")
        return task

    @staticmethod
    def delete(db: Session, task_id: int) -> None:
        with store_guard(db, "Delete task"):
            task = db.get(Task, task_id)
            if task is None:
                raise NotFound("Task", task_id)
            db.delete(task)
            db.commit()
        logger.info(f"Deleted task id={task_id}")
