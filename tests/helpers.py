from __future__ import annotations

from datetime import date

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from workbench.database import init_db
from workbench.models import Project, Task


def make_session_factory():
    """Fresh in-memory database shared by every session from the factory."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_task(**fields) -> Task:
    """Detached Task with every column the views read filled in."""
    values = {
        "name": "task",
        "description": "",
        "date": date(2026, 10, 19),
        "start_time": None,
        "end_time": None,
        "hours": 0.0,
        "priority": "medium",
        "urgency": "medium",
        "status": "planned",
        "actual_start": None,
        "actual_hours": 0.0,
        "project_id": None,
    }
    values.update(fields)
    return Task(**values)


def make_project(id: int, name: str, color: str = "#165DFF") -> Project:
    return Project(id=id, name=name, description="", color=color, archived=False)
