"""
Task persistence.

Ownership is not checked here; the endpoints decide which caller may reach
which function (see taskreport.modules.auth.ownership).
"""
from datetime import date
from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional, Tuple

from taskreport.core.exceptions import DeveloperNotFoundError, TaskNotFoundError, ValidationError
from taskreport.core.logging_config import logger
from taskreport.models import Developer, Task, TaskStatus
from taskreport.schemas.task import TaskCreate, TaskUpdate


def validate_date_range(start_date: Optional[date], end_date: Optional[date]) -> None:
    if start_date and end_date and start_date > end_date:
        raise ValidationError("start_date must not be after end_date", field="start_date")


async def get_developer(db: AsyncSession, developer_id: int) -> Developer:
    developer = await db.get(Developer, developer_id)
    if developer is None:
        raise DeveloperNotFoundError(developer_id)
    return developer


async def get_task(db: AsyncSession, task_id: int) -> Task:
    task = await db.get(Task, task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    return task


def _snapshot_developer(task: Task, developer: Developer) -> None:
    """Copy the developer's current role and team onto the task"""
    task.developer = developer
    task.developer_id = developer.id
    task.role = developer.role.value if developer.role else None
    task.team = developer.team


async def create_task(db: AsyncSession, developer_id: int, data: TaskCreate) -> Task:
    """Create a task for an existing developer"""
    developer = await get_developer(db, developer_id)

    task = Task(
        date=data.date,
        project=data.project,
        targets_given=data.targets_given,
        targets_achieved=data.targets_achieved,
        status=data.status,
    )
    _snapshot_developer(task, developer)

    db.add(task)
    await db.commit()

    logger.log_task_event("created", task.id, developer_id=developer.id, project=task.project)
    return task


async def update_task(db: AsyncSession, task: Task, data: TaskUpdate) -> Task:
    """Apply the fields that were sent; reassigning is only possible with TaskAdminUpdate"""
    changes = data.model_dump(exclude_unset=True)
    for field in ("date", "project", "targets_given", "status"):
        if field in changes and changes[field] is None:
            raise ValidationError(f"{field} cannot be null", field=field)

    developer_id = changes.pop("developer_id", None)
    if developer_id is not None and developer_id != task.developer_id:
        developer = await get_developer(db, developer_id)
        _snapshot_developer(task, developer)

    for field, value in changes.items():
        setattr(task, field, value)

    await db.commit()

    logger.log_task_event("updated", task.id, developer_id=task.developer_id, fields=sorted(changes))
    return task


async def delete_task(db: AsyncSession, task: Task) -> None:
    task_id, developer_id = task.id, task.developer_id
    await db.delete(task)
    await db.commit()
    logger.log_task_event("deleted", task_id, developer_id=developer_id)


async def delete_tasks_for_developer(db: AsyncSession, developer_id: int) -> int:
    """Remove every task owned by a developer; caller commits"""
    result = await db.execute(delete(Task).where(Task.developer_id == developer_id))
    return result.rowcount or 0


async def list_tasks(
    db: AsyncSession,
    developer_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    project: Optional[str] = None,
    status: Optional[TaskStatus] = None,
    skip: int = 0,
    limit: Optional[int] = None,
) -> Tuple[List[Task], int]:
    """Filter tasks, newest date first; returns (page, total)"""
    validate_date_range(start_date, end_date)

    conditions = []
    if developer_id is not None:
        conditions.append(Task.developer_id == developer_id)
    if start_date is not None:
        conditions.append(Task.date >= start_date)
    if end_date is not None:
        conditions.append(Task.date <= end_date)
    if project:
        conditions.append(Task.project == project)
    if status is not None:
        conditions.append(Task.status == status)

    total = await db.scalar(select(func.count(Task.id)).where(*conditions))

    query = (
        select(Task)
        .where(*conditions)
        .order_by(Task.date.desc(), Task.id.desc())
        .offset(skip)
    )
    if limit is not None:
        query = query.limit(limit)

    result = await db.execute(query)
    return list(result.scalars().unique().all()), total or 0


async def submitted_dates(
    db: AsyncSession,
    developer_id: int,
    start_date: date,
    end_date: date,
) -> set:
    """Distinct dates in the range on which the developer filed at least one task"""
    result = await db.execute(
        select(Task.date)
        .where(
            Task.developer_id == developer_id,
            Task.date >= start_date,
            Task.date <= end_date,
        )
        .distinct()
    )
    return set(result.scalars().all())
