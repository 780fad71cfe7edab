"""
Task endpoints for the authenticated caller.

Every route here applies the ownership rule, whatever the caller's role;
admins reach other developers' tasks through /admin/tasks.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import date
from typing import List, Optional

from taskreport.core.database import get_db
from taskreport.core.exceptions import ForbiddenError, ValidationError
from taskreport.modules.auth.dependencies import get_current_identity
from taskreport.modules.auth.identity import Identity
from taskreport.modules.auth.ownership import ensure_can_modify_task
from taskreport.schemas.task import (
    TaskCreate,
    TaskUpdate,
    TaskResponse,
    TaskListResponse,
    SubmissionStatus,
    MissingReportsResponse,
)
from taskreport.services import submission_service, task_service

router = APIRouter()


def _require_developer(identity: Identity) -> None:
    if not identity.is_developer:
        raise ForbiddenError("Only developers have their own tasks")


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    data: TaskCreate,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity)
):
    """
    File a daily task.

    Developers always file for themselves. Admins file on a developer's
    behalf and must name the developer.
    """
    if identity.is_admin:
        if data.developer_id is None:
            raise ValidationError("developer_id is required when an admin creates a task", field="developer_id")
        developer_id = data.developer_id
    else:
        if data.developer_id is not None and data.developer_id != identity.id:
            raise ForbiddenError("You can only create tasks for yourself")
        developer_id = identity.id

    return await task_service.create_task(db, developer_id, data)


@router.get("/submitted", response_model=TaskListResponse)
async def list_submitted_tasks(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    project: Optional[str] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity)
):
    """The caller's own tasks, newest first"""
    _require_developer(identity)
    tasks, total = await task_service.list_tasks(
        db,
        developer_id=identity.id,
        start_date=start_date,
        end_date=end_date,
        project=project,
        skip=skip,
        limit=limit,
    )
    return TaskListResponse(tasks=tasks, total=total)


@router.get("/submission-status", response_model=List[SubmissionStatus])
async def get_submission_status(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity)
):
    """One {date, submitted} entry per calendar day"""
    _require_developer(identity)
    start, end = submission_service.resolve_window(start_date, end_date)
    return await submission_service.submission_status(db, identity.id, start, end)


@router.get("/missing", response_model=MissingReportsResponse)
async def get_missing_reports(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity)
):
    """Working days on which the caller filed nothing"""
    _require_developer(identity)
    developer = await task_service.get_developer(db, identity.id)
    start, end = submission_service.resolve_window(start_date, end_date)
    missing = await submission_service.missing_reports(db, developer, start, end)

    return MissingReportsResponse(
        developer_id=developer.id,
        start_date=start,
        end_date=end,
        missing_dates=missing,
        total=len(missing),
    )


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity)
):
    task = await task_service.get_task(db, task_id)
    ensure_can_modify_task(task, identity)
    return task


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    data: TaskUpdate,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity)
):
    """Update an owned task; the task must exist before ownership is checked"""
    task = await task_service.get_task(db, task_id)
    ensure_can_modify_task(task, identity)
    return await task_service.update_task(db, task, data)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity)
):
    task = await task_service.get_task(db, task_id)
    ensure_can_modify_task(task, identity)
    await task_service.delete_task(db, task)
