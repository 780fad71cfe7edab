from taskreport.models.user import UserRole
from taskreport.models.admin import Admin
from taskreport.models.developer import Developer, DEFAULT_WORKING_DAYS
from taskreport.models.task import Task, TaskStatus

__all__ = [
    "UserRole",
    "Admin",
    "Developer",
    "DEFAULT_WORKING_DAYS",
    "Task",
    "TaskStatus",
]
