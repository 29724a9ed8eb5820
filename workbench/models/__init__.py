# Import all models so they register with SQLAlchemy Base.metadata
# This ensures Base.metadata.create_all() creates all tables

from workbench.models.project import Project
from workbench.models.task import Task

__all__ = [
    "Project",
    "Task",
]
