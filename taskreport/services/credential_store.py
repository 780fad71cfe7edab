"""
Credential store: lookups over the Admin and Developer tables.

Login resolution order is developer first, then admin. Emails are unique
across both tables (enforced by ``ensure_email_available``) so the order never
decides between two accounts.
"""
from email_validator import EmailNotValidError, validate_email
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional, Tuple, Union

from taskreport.core.exceptions import DuplicateEmailError, InvalidCredentialsError, ValidationError
from taskreport.core.security import verify_password, verify_dummy_password
from taskreport.models import Admin, Developer, UserRole

Account = Union[Admin, Developer]

ACCOUNT_MODELS = {
    UserRole.DEVELOPER: Developer,
    UserRole.ADMIN: Admin,
}


def normalize_account_email(email: str) -> str:
    """Normalize an email the same way the API's EmailStr fields do (domain lower-cased)"""
    try:
        return validate_email(email.strip(), check_deliverability=False).normalized
    except EmailNotValidError as e:
        raise ValidationError(str(e), field="email")


async def get_account(db: AsyncSession, role: UserRole, account_id: int) -> Optional[Account]:
    """Fetch an account by id from the table that matches its role"""
    model = ACCOUNT_MODELS[role]
    return await db.get(model, account_id)


async def find_by_email(db: AsyncSession, email: str) -> Optional[Tuple[Account, UserRole]]:
    """Find an account by exact email, developer table first"""
    for role in (UserRole.DEVELOPER, UserRole.ADMIN):
        model = ACCOUNT_MODELS[role]
        result = await db.execute(select(model).where(model.email == email))
        account = result.scalar_one_or_none()
        if account is not None:
            return account, role
    return None


async def authenticate(db: AsyncSession, email: str, password: str) -> Account:
    """
    Verify a login credential pair.

    Raises InvalidCredentialsError for an unknown email and for a wrong
    password alike.
    """
    found = await find_by_email(db, email)
    if found is None:
        verify_dummy_password(password)
        raise InvalidCredentialsError()

    account, _role = found
    if not verify_password(password, account.hashed_password):
        raise InvalidCredentialsError()

    return account


async def ensure_email_available(
    db: AsyncSession,
    email: str,
    exclude: Optional[Account] = None
) -> None:
    """Raise DuplicateEmailError if any other admin or developer uses this email"""
    found = await find_by_email(db, email)
    if found is None:
        return

    account, role = found
    if exclude is not None and account.id == exclude.id and role == exclude.role:
        return

    raise DuplicateEmailError(email)
