"""
schemas.py — Request and response shapes shared by services and routes.
"""

import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TaskStatus(str, Enum):
    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Level(str, Enum):
    """Priority and urgency share the same ordered scale."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


LEVEL_ORDER = {Level.LOW.value: 0, Level.MEDIUM.value: 1, Level.HIGH.value: 2}


class HoursBasis(str, Enum):
    PLANNED = "planned"
    ACTUAL = "actual"
    EFFECTIVE = "effective"  # actual hours once completed and logged, planned otherwise


# --- Projects ---

class ProjectCreate(BaseModel):
    name: str
    description: Optional[str] = ""
    color: Optional[str] = None


class ProjectUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None


class ProjectArchive(BaseModel):
    archived: bool = True


class ProjectOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    color: str
    archived: bool
    created_at: Optional[dt.datetime] = None
    task_count: int = 0


# --- Tasks ---

class TaskCreate(BaseModel):
    name: str
    project_id: Optional[int] = None
    description: Optional[str] = ""
    date: Optional[dt.date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    hours: Optional[float] = None
    deadline: Optional[dt.date] = None
    priority: Optional[str] = Level.MEDIUM.value
    urgency: Optional[str] = Level.MEDIUM.value


class TaskUpdate(BaseModel):
    name: Optional[str] = None
    project_id: Optional[int] = None
    description: Optional[str] = None
    date: Optional[dt.date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    hours: Optional[float] = None
    deadline: Optional[dt.date] = None
    priority: Optional[str] = None
    urgency: Optional[str] = None


class TaskSchedule(BaseModel):
    date: Optional[dt.date] = None  # None moves the task back to the backlog


class TaskStart(BaseModel):
    actual_start: Optional[dt.datetime] = None


class CompleteTaskInput(BaseModel):
    actual_hours: float
    actual_start: Optional[dt.datetime] = None


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: Optional[int] = None
    project_name: str = ""
    name: str
    description: str = ""
    date: Optional[dt.date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    hours: float = 0.0
    deadline: Optional[dt.date] = None
    priority: str
    urgency: str
    status: str  # open string: unknown statuses pass through
    actual_start: Optional[dt.datetime] = None
    actual_hours: float = 0.0
    created_at: Optional[dt.datetime] = None


# --- Derived views ---

class WorkbenchData(BaseModel):
    today: dt.date
    today_tasks: list[TaskOut] = Field(default_factory=list)
    total_count: int = 0
    completed_count: int = 0
    pending_count: int = 0
    planned_hours: float = 0.0
    completed_hours: float = 0.0
    backlog_count: int = 0


class DailyStats(BaseModel):
    date: dt.date
    total_count: int = 0
    completed_count: int = 0
    completion_rate: float = 0.0


class ProjectTimeStats(BaseModel):
    project_id: Optional[int] = None
    project_name: str
    color: str
    total_hours: float = 0.0
    task_count: int = 0
    percentage: float = 0.0


class ReportSummary(BaseModel):
    total_tasks: int = 0
    completed_tasks: int = 0
    total_hours: float = 0.0
    completed_hours: float = 0.0
    average_rate: float = 0.0


class ReportData(BaseModel):
    start_date: dt.date
    end_date: dt.date
    basis: HoursBasis
    project_stats: list[ProjectTimeStats] = Field(default_factory=list)
    daily_stats: list[DailyStats] = Field(default_factory=list)
    summary: ReportSummary = Field(default_factory=ReportSummary)
