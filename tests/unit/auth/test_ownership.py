import pytest
from types import SimpleNamespace

from taskreport.core.exceptions import ForbiddenError
from taskreport.models import UserRole
from taskreport.modules.auth.identity import Identity
from taskreport.modules.auth.ownership import (
    normalize_email,
    is_same_owner,
    ensure_task_owner,
    ensure_can_modify_task,
)


class TestNormalizeEmail:

    def test_trims_and_lowercases(self):
        assert normalize_email("  Dev@Example.COM ") == "dev@example.com"

    def test_none_is_empty(self):
        assert normalize_email(None) == ""


class TestEnsureTaskOwner:

    def test_exact_match(self):
        ensure_task_owner("a@x.com", "a@x.com")

    def test_case_and_whitespace_are_ignored(self):
        ensure_task_owner("a@x.com", " A@X.com ")
        assert is_same_owner(" A@X.COM", "a@x.com ")

    def test_different_owner(self):
        with pytest.raises(ForbiddenError):
            ensure_task_owner("a@x.com", "b@x.com")

    def test_missing_owner_email_never_matches(self):
        assert is_same_owner(None, None) is False
        assert is_same_owner("", "  ") is False

        with pytest.raises(ForbiddenError):
            ensure_task_owner(None, "a@x.com")


class TestEnsureCanModifyTask:

    def test_owner_passes(self):
        task = SimpleNamespace(id=1, developer_email="dev@example.com")
        identity = Identity(id=5, email="DEV@example.com", role=UserRole.DEVELOPER)

        ensure_can_modify_task(task, identity)

    def test_admin_is_not_exempt(self):
        task = SimpleNamespace(id=1, developer_email="dev@example.com")
        identity = Identity(id=1, email="admin@example.com", role=UserRole.ADMIN)

        with pytest.raises(ForbiddenError) as exc_info:
            ensure_can_modify_task(task, identity)
        assert exc_info.value.message == "You can only modify your own tasks"
