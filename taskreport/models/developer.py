from sqlalchemy import Column, String, Boolean, DateTime, JSON, Enum as SQLEnum
from datetime import datetime

from taskreport.core.database import Base
from taskreport.models.user import CredentialMixin, UserRole


DEFAULT_WORKING_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]


def default_working_days():
    return list(DEFAULT_WORKING_DAYS)


class Developer(CredentialMixin, Base):
    """Developer model"""
    __tablename__ = "developers"

    phone_number = Column(String(20), nullable=True)
    full_time = Column(Boolean, default=True, nullable=False)
    team = Column(String(50), nullable=True)  # 'web' or 'app'
    projects = Column(JSON, default=list, nullable=False)
    working_days = Column(JSON, default=default_working_days, nullable=False)
    joined_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    role = Column(SQLEnum(UserRole), default=UserRole.DEVELOPER, nullable=False)

    def __repr__(self):
        return f"<Developer {self.email}>"
