"""
project_service.py — Project records
CRUD and archiving for Projects. task_count is derived from live tasks on
every read; deleting a project orphans its tasks instead of removing them.
"""

import logging

from sqlalchemy.orm import Session
from sqlalchemy import func

from workbench.config import DEFAULT_PROJECT_COLOR
from workbench.database import store_guard
from workbench.errors import NotFound, ValidationError
from workbench.models.project import Project
from workbench.models.task import Task

logger = logging.getLogger(__name__)


def _clean_name(name) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Project name must not be empty")
    return name


class ProjectService:
    @staticmethod
    def _attach_counts(db: Session, projects: list[Project]) -> list[Project]:
        """Fill task_count from the tasks table."""
        if not projects:
            return projects
        rows = (
            db.query(Task.project_id, func.count(Task.id))
            .filter(Task.project_id.in_([p.id for p in projects]))
            .group_by(Task.project_id)
            .all()
        )
        counts = dict(rows)
        for p in projects:
            p.task_count = counts.get(p.id, 0)
        return projects

    @staticmethod
    def _ensure_unique(db: Session, name: str, exclude_id: int | None = None):
        query = db.query(Project.id).filter(Project.name == name)
        if exclude_id is not None:
            query = query.filter(Project.id != exclude_id)
        if query.first():
            raise ValidationError(f"Project name '{name}' is already taken")

    @staticmethod
    def create(db: Session, data: dict) -> Project:
        with store_guard(db, "Create project"):
            name = _clean_name(data.get("name"))
            ProjectService._ensure_unique(db, name)
            p = Project(
                name=name,
                description=data.get("description") or "",
                color=data.get("color") or DEFAULT_PROJECT_COLOR,
                archived=False,
            )
            db.add(p)
            db.commit()
            db.refresh(p)
            p.task_count = 0
        logger.info(f"Created project {p.name!r} (id={p.id})")
        return p

    @staticmethod
    def get_all(db: Session, include_archived: bool = False) -> list[Project]:
        """Active projects by name; archived ones last when included."""
        with store_guard(db, "List projects"):
            query = db.query(Project)
            if not include_archived:
                query = query.filter(Project.archived.is_(False))
            projects = query.order_by(Project.archived, Project.name).all()
            return ProjectService._attach_counts(db, projects)

    @staticmethod
    def get_by_id(db: Session, project_id: int) -> Project:
        with store_guard(db, "Load project"):
            p = db.get(Project, project_id)
            if p is None:
                raise NotFound("Project", project_id)
            ProjectService._attach_counts(db, [p])
            return p

    @staticmethod
    def update(db: Session, project_id: int, data: dict) -> Project:
        """Rename / describe / recolor. Task display names follow the rename."""
        with store_guard(db, "Update project"):
            p = db.get(Project, project_id)
            if p is None:
                raise NotFound("Project", project_id)

            changes = {}
            if "name" in data:
                changes["name"] = _clean_name(data["name"])
                ProjectService._ensure_unique(db, changes["name"], exclude_id=project_id)
            if data.get("description") is not None:
                changes["description"] = data["description"]
            if data.get("color"):
                changes["color"] = data["color"]

            for k, v in changes.items():
                setattr(p, k, v)
            db.commit()
            db.refresh(p)
            ProjectService._attach_counts(db, [p])
        logger.info(f"Updated project id={project_id}")
        return p

    @staticmethod
    def archive(db: Session, project_id: int, archived: bool = True) -> Project:
        with store_guard(db, "Archive project"):
            p = db.get(Project, project_id)
            if p is None:
                raise NotFound("Project", project_id)
            p.archived = archived
            db.commit()
            db.refresh(p)
            ProjectService._attach_counts(db, [p])
        logger.info(f"Project id={project_id} {'archived' if archived else 'unarchived'}")
        return p

    @staticmethod
    def delete(db: Session, project_id: int) -> int:
        """Delete the project and orphan its tasks. Returns how many were orphaned."""
        with store_guard(db, "Delete project"):
            p = db.get(Project, project_id)
            if p is None:
                raise NotFound("Project", project_id)
            orphaned = (
                db.query(Task)
                .filter(Task.project_id == project_id)
                .update({Task.project_id: None}, synchronize_session="fetch")
            )
            db.delete(p)
            db.commit()
        logger.info(f"Deleted project id={project_id}, orphaned {orphaned} task(s)")
        return orphaned
