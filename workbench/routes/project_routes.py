from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from workbench.database import get_db
from workbench.errors import WorkbenchError
from workbench.routes import http_error
from workbench.schemas import ProjectArchive, ProjectCreate, ProjectOut, ProjectUpdate
from workbench.services.project_service import ProjectService

router = APIRouter(prefix="/api/v1/projects", tags=["Projects"])


@router.get("", response_model=list[ProjectOut])
def list_projects(include_archived: bool = False, db: Session = Depends(get_db)):
    try:
        return ProjectService.get_all(db, include_archived=include_archived)
    except WorkbenchError as e:
        raise http_error(e)


@router.post("", response_model=ProjectOut, status_code=201)
def create_project(project_data: ProjectCreate, db: Session = Depends(get_db)):
    try:
        return ProjectService.create(db, project_data.model_dump(exclude_unset=True))
    except WorkbenchError as e:
        raise http_error(e)


@router.get("/{project_id}", response_model=ProjectOut)
def get_project(project_id: int, db: Session = Depends(get_db)):
    try:
        return ProjectService.get_by_id(db, project_id)
    except WorkbenchError as e:
        raise http_error(e)


@router.put("/{project_id}", response_model=ProjectOut)
def update_project(project_id: int, project_data: ProjectUpdate, db: Session = Depends(get_db)):
    try:
        return ProjectService.update(db, project_id, project_data.model_dump(exclude_unset=True))
    except WorkbenchError as e:
        raise http_error(e)


@router.post("/{project_id}/archive", response_model=ProjectOut)
def archive_project(project_id: int, body: ProjectArchive, db: Session = Depends(get_db)):
    try:
        return ProjectService.archive(db, project_id, body.archived)
    except WorkbenchError as e:
        raise http_error(e)


@router.delete("/{project_id}")
def delete_project(project_id: int, db: Session = Depends(get_db)):
    try:
        orphaned = ProjectService.delete(db, project_id)
        return {"status": "success", "orphaned_tasks": orphaned}
    except WorkbenchError as e:
        raise http_error(e)
