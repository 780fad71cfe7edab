from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import List, Optional
from datetime import datetime

from taskreport.models.user import UserRole

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def _normalize_weekdays(days: Optional[List[str]]) -> Optional[List[str]]:
    if days is None:
        return None
    normalized = []
    for day in days:
        name = day.strip().capitalize()
        if name not in WEEKDAYS:
            raise ValueError(f"Unknown weekday '{day}'")
        if name not in normalized:
            normalized.append(name)
    return normalized


class DeveloperCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6)
    phone_number: Optional[str] = Field(None, max_length=20)
    full_time: bool = True
    team: Optional[str] = Field(None, max_length=50)
    projects: List[str] = Field(default_factory=list)
    working_days: Optional[List[str]] = None
    joined_at: Optional[datetime] = None

    @field_validator("working_days")
    @classmethod
    def validate_working_days(cls, v):
        return _normalize_weekdays(v)


class DeveloperUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6)
    phone_number: Optional[str] = Field(None, max_length=20)
    full_time: Optional[bool] = None
    team: Optional[str] = Field(None, max_length=50)
    projects: Optional[List[str]] = None
    working_days: Optional[List[str]] = None
    joined_at: Optional[datetime] = None

    @field_validator("working_days")
    @classmethod
    def validate_working_days(cls, v):
        return _normalize_weekdays(v)


class DeveloperResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: UserRole
    phone_number: Optional[str] = None
    full_time: bool
    team: Optional[str] = None
    projects: List[str] = []
    working_days: List[str] = []
    joined_at: datetime
    created_at: datetime
