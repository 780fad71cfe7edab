"""
Developer management endpoints (admin only).
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from datetime import date
from typing import List, Optional

from taskreport.core.database import get_db
from taskreport.core.logging_config import logger
from taskreport.core.security import get_password_hash
from taskreport.models import Developer
from taskreport.modules.auth.dependencies import get_current_admin
from taskreport.modules.auth.identity import Identity
from taskreport.schemas.developer import DeveloperCreate, DeveloperUpdate, DeveloperResponse
from taskreport.schemas.task import MissingReportsResponse
from taskreport.services import credential_store, submission_service, task_service

router = APIRouter()


@router.get("", response_model=List[DeveloperResponse])
async def list_developers(
    team: Optional[str] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_admin: Identity = Depends(get_current_admin)
):
    """List developers, optionally filtered by team"""
    query = select(Developer).order_by(Developer.name, Developer.id)
    if team:
        query = query.where(Developer.team == team)

    result = await db.execute(query.offset(skip).limit(limit))
    return result.scalars().all()


@router.post("", response_model=DeveloperResponse, status_code=status.HTTP_201_CREATED)
async def create_developer(
    data: DeveloperCreate,
    db: AsyncSession = Depends(get_db),
    current_admin: Identity = Depends(get_current_admin)
):
    """Create a developer account"""
    await credential_store.ensure_email_available(db, data.email)

    fields = data.model_dump(exclude={"password"}, exclude_none=True)
    developer = Developer(hashed_password=get_password_hash(data.password), **fields)

    db.add(developer)
    await db.commit()
    await db.refresh(developer)

    logger.info(
        f"Developer {developer.email} created by admin {current_admin.email}",
        extra={"event_type": "developer_created", "developer_id": developer.id}
    )
    return developer


@router.get("/{developer_id}", response_model=DeveloperResponse)
async def get_developer(
    developer_id: int,
    db: AsyncSession = Depends(get_db),
    current_admin: Identity = Depends(get_current_admin)
):
    return await task_service.get_developer(db, developer_id)


@router.put("/{developer_id}", response_model=DeveloperResponse)
async def update_developer(
    developer_id: int,
    data: DeveloperUpdate,
    db: AsyncSession = Depends(get_db),
    current_admin: Identity = Depends(get_current_admin)
):
    """Update a developer; existing tasks keep their role/team snapshot"""
    developer = await task_service.get_developer(db, developer_id)
    changes = data.model_dump(exclude_unset=True)

    if changes.get("email") and changes["email"] != developer.email:
        await credential_store.ensure_email_available(db, changes["email"], exclude=developer)

    password = changes.pop("password", None)
    if password:
        developer.hashed_password = get_password_hash(password)

    for field, value in changes.items():
        if value is None and field in ("name", "email", "full_time", "projects", "working_days", "joined_at"):
            continue
        setattr(developer, field, value)

    await db.commit()
    await db.refresh(developer)
    return developer


@router.delete("/{developer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_developer(
    developer_id: int,
    db: AsyncSession = Depends(get_db),
    current_admin: Identity = Depends(get_current_admin)
):
    """Delete a developer and every task they filed"""
    developer = await task_service.get_developer(db, developer_id)

    removed = await task_service.delete_tasks_for_developer(db, developer.id)
    await db.delete(developer)
    await db.commit()

    logger.info(
        f"Developer {developer_id} deleted by admin {current_admin.email} ({removed} tasks removed)",
        extra={"event_type": "developer_deleted", "developer_id": developer_id}
    )


@router.get("/{developer_id}/missing-reports", response_model=MissingReportsResponse)
async def get_missing_reports(
    developer_id: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: AsyncSession = Depends(get_db),
    current_admin: Identity = Depends(get_current_admin)
):
    """Working days on which the developer filed no task"""
    developer = await task_service.get_developer(db, developer_id)
    start, end = submission_service.resolve_window(start_date, end_date)
    missing = await submission_service.missing_reports(db, developer, start, end)

    return MissingReportsResponse(
        developer_id=developer.id,
        start_date=start,
        end_date=end,
        missing_dates=missing,
        total=len(missing),
    )
