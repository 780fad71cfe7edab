"""
Custom Exceptions for the Task Report API
=========================================

Handlers and services raise these instead of HTTPException so that a single
exception handler (see taskreport.main) renders every failure as

    {"error": {"message": "...", "status": 404}}

Usage:
    from taskreport.core.exceptions import TaskNotFoundError

    task = await db.get(Task, task_id)
    if not task:
        raise TaskNotFoundError(task_id)
"""

from typing import Optional, Any, Dict


class TaskReportError(Exception):
    """Base exception for all Task Report API errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str = "Internal server error",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "status": self.status_code,
        }


# ============================================
# Authentication & Authorization Errors
# ============================================

class UnauthorizedError(TaskReportError):
    """Missing, invalid or expired credentials"""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class TokenExpiredError(UnauthorizedError):
    """JWT token has expired"""

    def __init__(self):
        super().__init__("Token has expired")


class InvalidTokenError(UnauthorizedError):
    """JWT token is invalid"""

    def __init__(self, message: str = "Token is not valid"):
        super().__init__(message)


class InvalidCredentialsError(UnauthorizedError):
    """Login failed. Never says whether the email or the password was wrong."""

    def __init__(self):
        super().__init__("Invalid credentials")


class ForbiddenError(TaskReportError):
    """Authenticated, but not allowed to perform this action"""

    status_code = 403

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


# ============================================
# Resource Errors (404-type)
# ============================================

class NotFoundError(TaskReportError):
    """Base class for not found errors"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: Any):
        super().__init__(
            f"{resource_type} not found",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


class DeveloperNotFoundError(NotFoundError):
    def __init__(self, developer_id: Any):
        super().__init__("Developer", developer_id)


class AdminNotFoundError(NotFoundError):
    def __init__(self, admin_id: Any):
        super().__init__("Admin", admin_id)


class TaskNotFoundError(NotFoundError):
    def __init__(self, task_id: Any):
        super().__init__("Task", task_id)


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationError(TaskReportError):
    """Input validation failed"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, details=details)


class DuplicateEmailError(ValidationError):
    """Email already belongs to an admin or developer"""

    def __init__(self, email: str):
        super().__init__(f"An account with email '{email}' already exists", field="email")


# ============================================
# Server Errors
# ============================================

class InternalError(TaskReportError):
    """Unexpected failure, e.g. database unreachable"""

    status_code = 500


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: TaskReportError, include_details: bool = False) -> Dict[str, Any]:
    """Convert exception to the uniform API error body"""
    body = error.to_dict()
    if include_details and error.details:
        body["details"] = error.details
    return {"error": body}


def error_body(message: str, status: int) -> Dict[str, Any]:
    """Uniform error body for failures that are not TaskReportErrors"""
    return {"error": {"message": message, "status": status}}
