"""
Admin task endpoints: any developer's tasks, no ownership rule.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import date
from typing import Optional

from taskreport.core.database import get_db
from taskreport.models import TaskStatus
from taskreport.modules.auth.dependencies import get_current_admin
from taskreport.modules.auth.identity import Identity
from taskreport.schemas.task import TaskAdminUpdate, TaskResponse, TaskListResponse
from taskreport.services import task_service

router = APIRouter()


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    developer_id: Optional[int] = None,
    project: Optional[str] = None,
    status: Optional[TaskStatus] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_admin: Identity = Depends(get_current_admin)
):
    """List tasks with filtering and pagination"""
    tasks, total = await task_service.list_tasks(
        db,
        developer_id=developer_id,
        start_date=start_date,
        end_date=end_date,
        project=project,
        status=status,
        skip=skip,
        limit=limit,
    )
    return TaskListResponse(tasks=tasks, total=total)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    current_admin: Identity = Depends(get_current_admin)
):
    return await task_service.get_task(db, task_id)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    data: TaskAdminUpdate,
    db: AsyncSession = Depends(get_db),
    current_admin: Identity = Depends(get_current_admin)
):
    """Update any task; a new developer_id reassigns it"""
    task = await task_service.get_task(db, task_id)
    return await task_service.update_task(db, task, data)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    current_admin: Identity = Depends(get_current_admin)
):
    task = await task_service.get_task(db, task_id)
    await task_service.delete_task(db, task)
