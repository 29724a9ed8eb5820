from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean
from sqlalchemy.orm import relationship
from workbench.database import Base
from workbench.config import DEFAULT_PROJECT_COLOR


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(300), nullable=False, unique=True)
    description = Column(Text, nullable=False, default="")
    color = Column(String(32), nullable=False, default=DEFAULT_PROJECT_COLOR)  # opaque display tag
    archived = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    # No delete cascade: removing a project orphans its tasks
    tasks = relationship("Task", back_populates="project")

    # Filled in by ProjectService at read time; not a column
    task_count = 0
