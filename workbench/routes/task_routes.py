from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from workbench.database import get_db
from workbench.errors import WorkbenchError
from workbench.routes import http_error
from workbench.schemas import CompleteTaskInput, TaskCreate, TaskOut, TaskSchedule, TaskStart, TaskUpdate
from workbench.services.status_machine import StatusMachine
from workbench.services.task_service import TaskService

router = APIRouter(prefix="/api/v1/tasks", tags=["Tasks"])


@router.get("", response_model=list[TaskOut])
def list_tasks(
    date: Optional[date] = None,
    project_id: Optional[int] = None,
    status: Optional[str] = None,
    backlog: bool = False,
    db: Session = Depends(get_db),
):
    filters = {}
    if date is not None:
        filters["date"] = date
    if project_id is not None:
        filters["project_id"] = project_id
    if status:
        filters["status"] = status
    if backlog:
        filters["backlog"] = True
    try:
        return TaskService.get_all(db, filters)
    except WorkbenchError as e:
        raise http_error(e)


@router.post("", response_model=TaskOut, status_code=201)
def create_task(task_data: TaskCreate, db: Session = Depends(get_db)):
    try:
        return TaskService.create(db, task_data.model_dump(exclude_unset=True))
    except WorkbenchError as e:
        raise http_error(e)


@router.get("/{task_id}", response_model=TaskOut)
def get_task(task_id: int, db: Session = Depends(get_db)):
    try:
        return TaskService.get_by_id(db, task_id)
    except WorkbenchError as e:
        raise http_error(e)


@router.put("/{task_id}", response_model=TaskOut)
def update_task(task_id: int, task_data: TaskUpdate, db: Session = Depends(get_db)):
    try:
        return TaskService.update(db, task_id, task_data.model_dump(exclude_unset=True))
    except WorkbenchError as e:
        raise http_error(e)


@router.delete("/{task_id}")
def delete_task(task_id: int, db: Session = Depends(get_db)):
    try:
        TaskService.delete(db, task_id)
        return {"status": "success"}
    except WorkbenchError as e:
        raise http_error(e)


@router.post("/{task_id}/schedule", response_model=TaskOut)
def schedule_task(task_id: int, body: TaskSchedule, db: Session = Depends(get_db)):
    try:
        return TaskService.assign_date(db, task_id, body.date)
    except WorkbenchError as e:
        raise http_error(e)


@router.post("/{task_id}/start", response_model=TaskOut)
def start_task(task_id: int, body: Optional[TaskStart] = None, db: Session = Depends(get_db)):
    try:
        return StatusMachine.start(db, task_id, body.actual_start if body else None)
    except WorkbenchError as e:
        raise http_error(e)


@router.post("/{task_id}/complete", response_model=TaskOut)
def complete_task(task_id: int, body: CompleteTaskInput, db: Session = Depends(get_db)):
    try:
        return StatusMachine.complete(db, task_id, body.actual_hours, body.actual_start)
    except WorkbenchError as e:
        raise http_error(e)


@router.post("/{task_id}/reopen", response_model=TaskOut)
def reopen_task(task_id: int, db: Session = Depends(get_db)):
    try:
        return StatusMachine.reopen(db, task_id)
    except WorkbenchError as e:
        raise http_error(e)
