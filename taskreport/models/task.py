from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from taskreport.core.database import Base


class TaskStatus(str, enum.Enum):
    """Flat categorical status; any value may follow any other"""
    COMPLETED = "Completed"
    UNFINISHED = "Unfinished"
    PENDING = "Pending"
    DEPENDENT = "Dependent"
    PARTIALLY_COMPLETED = "PartiallyCompleted"


class Task(Base):
    """Daily work-log entry owned by one developer"""
    __tablename__ = "tasks"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    developer_id = Column(Integer, ForeignKey("developers.id", ondelete="CASCADE"), index=True, nullable=False)

    # Snapshot of the developer at submission time
    role = Column(String(50), nullable=True)
    team = Column(String(50), nullable=True)

    date = Column(Date, index=True, nullable=False)
    project = Column(String(255), nullable=False)
    targets_given = Column(Text, nullable=False)
    targets_achieved = Column(Text, nullable=True)
    status = Column(SQLEnum(TaskStatus), default=TaskStatus.PENDING, nullable=False)

    submitted_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    developer = relationship("Developer", lazy="joined")

    @property
    def developer_name(self):
        return self.developer.name if self.developer else None

    @property
    def developer_email(self):
        return self.developer.email if self.developer else None

    def __repr__(self):
        return f"<Task {self.id} {self.project} {self.date}>"
