from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, DateTime, Date, Float, ForeignKey, Index
from sqlalchemy.orm import relationship
from workbench.database import Base


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="SET NULL"), nullable=True)
    name = Column(String(500), nullable=False)
    description = Column(Text, nullable=False, default="")
    date = Column(Date, nullable=True)  # scheduled day, None = backlog
    start_time = Column(String(5), nullable=True)  # HH:MM
    end_time = Column(String(5), nullable=True)  # HH:MM
    hours = Column(Float, nullable=False, default=0.0)  # planned
    deadline = Column(Date, nullable=True)
    priority = Column(String(20), nullable=False, default="medium")  # high/medium/low
    urgency = Column(String(20), nullable=False, default="medium")  # high/medium/low
    status = Column(String(32), nullable=False, default="planned")  # planned/in_progress/completed/...
    actual_start = Column(DateTime, nullable=True)
    actual_hours = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    project = relationship("Project", back_populates="tasks")

    __table_args__ = (
        Index("idx_tasks_date", "date"),
        Index("idx_tasks_status", "status"),
        Index("idx_tasks_project", "project_id"),
        Index("idx_tasks_deadline", "deadline"),
    )

    @property
    def project_name(self) -> str:
        """Resolved from the owning project on every read, never stored."""
        return self.project.name if self.project is not None else ""
