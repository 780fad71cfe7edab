from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginUser(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    email: str
    name: str
    role: str
    is_admin: bool = Field(..., alias="isAdmin")


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: LoginUser


class TokenData(BaseModel):
    """Claims carried by an access token"""
    id: int
    email: str
    role: str
    is_admin: bool = Field(False, alias="isAdmin")


class IdentityResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    email: str
    name: str
    role: str
    is_admin: bool = Field(..., alias="isAdmin")
