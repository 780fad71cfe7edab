import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from taskreport.models.task import TaskStatus


class TaskCreate(BaseModel):
    # Required when an admin files a task on a developer's behalf
    developer_id: Optional[int] = None
    date: datetime.date
    project: str = Field(..., min_length=1, max_length=255)
    targets_given: str = Field(..., min_length=1)
    targets_achieved: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING


class TaskUpdate(BaseModel):
    date: Optional[datetime.date] = None
    project: Optional[str] = Field(None, min_length=1, max_length=255)
    targets_given: Optional[str] = Field(None, min_length=1)
    targets_achieved: Optional[str] = None
    status: Optional[TaskStatus] = None


class TaskAdminUpdate(TaskUpdate):
    developer_id: Optional[int] = None


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    developer_id: int
    developer_name: Optional[str] = None
    developer_email: Optional[str] = None
    role: Optional[str] = None
    team: Optional[str] = None
    date: datetime.date
    project: str
    targets_given: str
    targets_achieved: Optional[str] = None
    status: TaskStatus
    submitted_at: datetime.datetime


class TaskListResponse(BaseModel):
    tasks: List[TaskResponse]
    total: int


class SubmissionStatus(BaseModel):
    date: datetime.date
    submitted: bool


class MissingReportsResponse(BaseModel):
    developer_id: int
    start_date: datetime.date
    end_date: datetime.date
    missing_dates: List[datetime.date]
    total: int
