"""
Admin account management endpoints (admin only).
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List

from taskreport.core.database import get_db
from taskreport.core.exceptions import AdminNotFoundError, ForbiddenError
from taskreport.core.logging_config import logger
from taskreport.core.security import get_password_hash
from taskreport.models import Admin
from taskreport.modules.auth.dependencies import get_current_admin
from taskreport.modules.auth.identity import Identity
from taskreport.schemas.admin import AdminCreate, AdminUpdate, AdminResponse
from taskreport.services import credential_store

router = APIRouter()


async def _get_admin(db: AsyncSession, admin_id: int) -> Admin:
    admin = await db.get(Admin, admin_id)
    if admin is None:
        raise AdminNotFoundError(admin_id)
    return admin


@router.get("", response_model=List[AdminResponse])
async def list_admins(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_admin: Identity = Depends(get_current_admin)
):
    result = await db.execute(
        select(Admin).order_by(Admin.name, Admin.id).offset(skip).limit(limit)
    )
    return result.scalars().all()


@router.post("", response_model=AdminResponse, status_code=status.HTTP_201_CREATED)
async def create_admin(
    data: AdminCreate,
    db: AsyncSession = Depends(get_db),
    current_admin: Identity = Depends(get_current_admin)
):
    """Create another admin account"""
    await credential_store.ensure_email_available(db, data.email)

    admin = Admin(
        name=data.name,
        email=data.email,
        phone=data.phone,
        hashed_password=get_password_hash(data.password),
    )
    db.add(admin)
    await db.commit()
    await db.refresh(admin)

    logger.info(
        f"Admin {admin.email} created by admin {current_admin.email}",
        extra={"event_type": "admin_created", "admin_id": admin.id}
    )
    return admin


@router.get("/{admin_id}", response_model=AdminResponse)
async def get_admin(
    admin_id: int,
    db: AsyncSession = Depends(get_db),
    current_admin: Identity = Depends(get_current_admin)
):
    return await _get_admin(db, admin_id)


@router.put("/{admin_id}", response_model=AdminResponse)
async def update_admin(
    admin_id: int,
    data: AdminUpdate,
    db: AsyncSession = Depends(get_db),
    current_admin: Identity = Depends(get_current_admin)
):
    admin = await _get_admin(db, admin_id)
    changes = data.model_dump(exclude_unset=True)

    if changes.get("email") and changes["email"] != admin.email:
        await credential_store.ensure_email_available(db, changes["email"], exclude=admin)

    password = changes.pop("password", None)
    if password:
        admin.hashed_password = get_password_hash(password)

    for field, value in changes.items():
        if value is None and field in ("name", "email"):
            continue
        setattr(admin, field, value)

    await db.commit()
    await db.refresh(admin)
    return admin


@router.delete("/{admin_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_admin(
    admin_id: int,
    db: AsyncSession = Depends(get_db),
    current_admin: Identity = Depends(get_current_admin)
):
    """Delete an admin account; admins cannot delete themselves"""
    admin = await _get_admin(db, admin_id)
    if admin.id == current_admin.id:
        raise ForbiddenError("You cannot delete your own admin account")

    await db.delete(admin)
    await db.commit()

    logger.info(
        f"Admin {admin_id} deleted by admin {current_admin.email}",
        extra={"event_type": "admin_deleted", "admin_id": admin_id}
    )
