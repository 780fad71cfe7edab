"""
Default accounts for a fresh database.

- SEED_ADMIN_EMAIL / SEED_ADMIN_PASSWORD → admin
- SEED_DEVELOPER_EMAIL / SEED_DEVELOPER_PASSWORD → developer (team web, Mon-Fri)

Existing accounts are left untouched by ``seed_default_accounts``;
``reset_admin_password`` updates the admin's password or creates the admin.
"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Tuple

from taskreport.core.config import settings
from taskreport.core.exceptions import DuplicateEmailError
from taskreport.core.logging_config import logger
from taskreport.core.security import get_password_hash
from taskreport.models import Admin, Developer, UserRole, DEFAULT_WORKING_DAYS
from taskreport.services import credential_store


async def seed_default_accounts(db: AsyncSession) -> List[Tuple[str, UserRole, bool]]:
    """Create the default admin and developer if missing; returns (email, role, created)"""
    results = []

    admin_email = credential_store.normalize_account_email(settings.SEED_ADMIN_EMAIL)
    found = await credential_store.find_by_email(db, admin_email)
    if found is None:
        db.add(Admin(
            name=settings.SEED_ADMIN_NAME,
            email=admin_email,
            hashed_password=get_password_hash(settings.SEED_ADMIN_PASSWORD),
        ))
    results.append((admin_email, UserRole.ADMIN, found is None))

    developer_email = credential_store.normalize_account_email(settings.SEED_DEVELOPER_EMAIL)
    found = await credential_store.find_by_email(db, developer_email)
    if found is None:
        db.add(Developer(
            name=settings.SEED_DEVELOPER_NAME,
            email=developer_email,
            hashed_password=get_password_hash(settings.SEED_DEVELOPER_PASSWORD),
            phone_number="1234567890",
            full_time=True,
            team="web",
            projects=["Project A", "Project B"],
            working_days=list(DEFAULT_WORKING_DAYS),
        ))
    results.append((developer_email, UserRole.DEVELOPER, found is None))

    await db.commit()

    for email, role, created in results:
        logger.info(
            f"Seed {role.value} {email}: {'created' if created else 'already exists'}",
            extra={"event_type": "seed", "user_role": role.value, "account_created": created}
        )
    return results


async def reset_admin_password(db: AsyncSession, email: str, password: str, name: str = "Admin User") -> bool:
    """
    Set an admin's password, creating the admin if needed.

    The email is normalized as at login. Returns True when a new admin was
    created. Raises DuplicateEmailError if the email belongs to a developer.
    """
    email = credential_store.normalize_account_email(email)
    result = await db.execute(select(Admin).where(Admin.email == email))
    admin = result.scalar_one_or_none()

    if admin is None:
        found = await credential_store.find_by_email(db, email)
        if found is not None:
            raise DuplicateEmailError(email)
        admin = Admin(name=name, email=email, hashed_password=get_password_hash(password))
        db.add(admin)
        created = True
    else:
        admin.hashed_password = get_password_hash(password)
        created = False

    await db.commit()

    logger.log_auth_event(
        event="reset_admin_password",
        success=True,
        user_email=email,
        account_created=created,
    )
    return created
