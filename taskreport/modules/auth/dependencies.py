from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from taskreport.core.database import get_db
from taskreport.core.exceptions import ForbiddenError, InvalidTokenError, UnauthorizedError
from taskreport.core.logging_config import logger, set_user_id
from taskreport.core.security import decode_token
from taskreport.models.user import UserRole
from taskreport.modules.auth.identity import Identity
from taskreport.modules.auth.ownership import normalize_email
from taskreport.schemas.auth import TokenData
from taskreport.services import credential_store

# auto_error=False: a missing or non-bearer header must surface as 401, not
# FastAPI's default 403
security = HTTPBearer(auto_error=False)


def parse_claims(payload: dict) -> TokenData:
    """Validate the decoded claim set; anything unexpected is an invalid token"""
    try:
        claims = TokenData.model_validate(payload)
    except PydanticValidationError:
        raise InvalidTokenError("Invalid token payload")

    try:
        UserRole(claims.role)
    except ValueError:
        raise InvalidTokenError("Invalid token role")

    return claims


async def get_current_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> Identity:
    """
    Authentication gate.

    Verifies the bearer token, then re-resolves the claimed account from the
    database so that a deleted account stops working immediately even though
    its token has not expired. The stored email must still match the token's
    email claim.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("No token, authorization denied")

    payload = decode_token(credentials.credentials)
    claims = parse_claims(payload)

    record = await credential_store.get_account(db, UserRole(claims.role), claims.id)
    if record is None or normalize_email(record.email) != normalize_email(claims.email):
        # A record under the same id but another email is a different account
        logger.log_auth_event(
            event="authenticate",
            success=False,
            user_email=claims.email,
            reason="account no longer exists" if record is None else "email does not match account",
        )
        raise UnauthorizedError("Account no longer exists")

    identity = Identity.from_record(record)

    request.state.identity = identity
    request.state.user_id = f"{identity.role.value}:{identity.id}"
    set_user_id(request.state.user_id)

    return identity


def ensure_admin(identity: Optional[Identity]) -> Identity:
    """Authorization gate: only admins pass"""
    if identity is None:
        raise UnauthorizedError("Authentication required")

    if identity.role != UserRole.ADMIN:
        logger.log_auth_event(
            event="authorize_admin",
            success=False,
            user_email=identity.email,
            reason=f"role {identity.role.value}",
        )
        raise ForbiddenError("Access denied. Admins only.")

    return identity


async def get_current_admin(
    identity: Identity = Depends(get_current_identity)
) -> Identity:
    """Get current admin"""
    return ensure_admin(identity)
