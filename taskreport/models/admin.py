from sqlalchemy import Column, String, Enum as SQLEnum

from taskreport.core.database import Base
from taskreport.models.user import CredentialMixin, UserRole


class Admin(CredentialMixin, Base):
    """Admin model"""
    __tablename__ = "admins"

    phone = Column(String(20), nullable=True)
    role = Column(SQLEnum(UserRole), default=UserRole.ADMIN, nullable=False)

    def __repr__(self):
        return f"<Admin {self.email}>"
