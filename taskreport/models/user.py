from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime
import enum


class UserRole(str, enum.Enum):
    """Role tag carried by every credential record and session token"""
    ADMIN = "admin"
    DEVELOPER = "developer"


class CredentialMixin:
    """Columns shared by the Admin and Developer credential tables"""

    # ids of deleted accounts must never be handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
