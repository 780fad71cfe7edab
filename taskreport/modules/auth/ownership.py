"""
Task ownership rule.

A developer may only read, change or delete a task whose owning developer's
email equals their own once both are trimmed and lower-cased. Callers must
load the task first so that a missing task is reported as NotFound before
ownership is considered.
"""
from typing import Optional

from taskreport.core.exceptions import ForbiddenError
from taskreport.core.logging_config import logger
from taskreport.modules.auth.identity import Identity


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def is_same_owner(owner_email: Optional[str], identity_email: Optional[str]) -> bool:
    owner = normalize_email(owner_email)
    return bool(owner) and owner == normalize_email(identity_email)


def ensure_task_owner(owner_email: Optional[str], identity_email: Optional[str]) -> None:
    """Raise ForbiddenError unless both emails normalize to the same value"""
    if not is_same_owner(owner_email, identity_email):
        raise ForbiddenError("You can only modify your own tasks")


def ensure_can_modify_task(task, identity: Identity) -> None:
    """Ownership check for a loaded Task against the authenticated identity"""
    try:
        ensure_task_owner(task.developer_email, identity.email)
    except ForbiddenError:
        logger.log_auth_event(
            event="task_ownership",
            success=False,
            user_email=identity.email,
            reason=f"not the owner of task {task.id}",
        )
        raise
