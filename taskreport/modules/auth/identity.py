from dataclasses import dataclass
from typing import Optional

from taskreport.models.user import UserRole


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, resolved from storage on every request"""
    id: int
    email: str
    role: UserRole
    name: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_developer(self) -> bool:
        return self.role == UserRole.DEVELOPER

    @classmethod
    def from_record(cls, record) -> "Identity":
        return cls(id=record.id, email=record.email, role=record.role, name=record.name)
