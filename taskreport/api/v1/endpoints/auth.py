from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from taskreport.core.database import get_db
from taskreport.core.exceptions import InvalidCredentialsError
from taskreport.core.security import create_access_token
from taskreport.core.logging_config import logger, set_user_id
from taskreport.schemas.auth import UserLogin, LoginResponse, LoginUser, IdentityResponse
from taskreport.modules.auth.dependencies import get_current_identity
from taskreport.modules.auth.identity import Identity
from taskreport.services import credential_store
from taskreport.core.rate_limiter import auth_rate_limit


router = APIRouter()


@router.post("/login", response_model=LoginResponse, response_model_by_alias=True)
@auth_rate_limit()
async def login(
    request: Request,
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    """Login as a developer or an admin (rate limited)"""
    client_ip = request.client.host if request.client else "unknown"

    try:
        account = await credential_store.authenticate(db, credentials.email, credentials.password)
    except InvalidCredentialsError:
        logger.log_auth_event(
            event="login",
            success=False,
            user_email=credentials.email,
            reason="Invalid credentials",
            client_ip=client_ip
        )
        raise

    identity = Identity.from_record(account)

    # Set user context for downstream logging
    set_user_id(f"{identity.role.value}:{identity.id}")

    token_data = {
        "sub": str(identity.id),
        "id": identity.id,
        "email": identity.email,
        "role": identity.role.value,
        "isAdmin": identity.is_admin,
    }
    token = create_access_token(token_data)

    logger.log_auth_event(
        event="login",
        success=True,
        user_email=identity.email,
        client_ip=client_ip,
        user_role=identity.role.value
    )

    return LoginResponse(
        token=token,
        user=LoginUser(
            id=identity.id,
            email=identity.email,
            name=identity.name,
            role=identity.role.value,
            is_admin=identity.is_admin,
        )
    )


@router.get("/me", response_model=IdentityResponse, response_model_by_alias=True)
async def get_me(identity: Identity = Depends(get_current_identity)):
    """Get the account behind the current token"""
    return IdentityResponse(
        id=identity.id,
        email=identity.email,
        name=identity.name,
        role=identity.role.value,
        is_admin=identity.is_admin,
    )
