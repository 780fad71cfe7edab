import pytest
from datetime import date

from taskreport.core.config import settings
from taskreport.core.exceptions import ValidationError
from taskreport.services.submission_service import (
    is_working_day,
    iter_days,
    missing_reports,
    resolve_window,
    submission_status,
)


class TestResolveWindow:

    def test_defaults_to_configured_window(self):
        start, end = resolve_window(None, None, today=date(2024, 3, 31))

        assert end == date(2024, 3, 31)
        assert (end - start).days + 1 == settings.SUBMISSION_WINDOW_DAYS

    def test_explicit_range(self):
        assert resolve_window(date(2024, 1, 1), date(2024, 1, 5)) == (date(2024, 1, 1), date(2024, 1, 5))

    def test_span_limit(self):
        with pytest.raises(ValidationError):
            resolve_window(date(2022, 1, 1), date(2024, 1, 1))

    def test_inverted_range(self):
        with pytest.raises(ValidationError):
            resolve_window(date(2024, 1, 5), date(2024, 1, 1))


def test_iter_days_is_inclusive():
    assert list(iter_days(date(2024, 2, 28), date(2024, 3, 1))) == [
        date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)
    ]


def test_is_working_day():
    monday, saturday = date(2024, 1, 1), date(2024, 1, 6)

    assert is_working_day(monday, None)
    assert not is_working_day(saturday, None)
    assert is_working_day(saturday, ["Saturday"])


@pytest.mark.asyncio
async def test_submission_status_marks_filed_days(db_session, developer, task_factory):
    await task_factory(developer, date=date(2024, 1, 2))
    await task_factory(developer, date=date(2024, 1, 2), project="Second entry")

    days = await submission_status(db_session, developer.id, date(2024, 1, 1), date(2024, 1, 3))

    assert [(d.date, d.submitted) for d in days] == [
        (date(2024, 1, 1), False),
        (date(2024, 1, 2), True),
        (date(2024, 1, 3), False),
    ]


@pytest.mark.asyncio
async def test_missing_reports_skip_weekends(db_session, developer, task_factory):
    await task_factory(developer, date=date(2024, 1, 5))

    missing = await missing_reports(db_session, developer, date(2024, 1, 4), date(2024, 1, 8))

    # Jan 6 and 7 are a weekend
    assert missing == [date(2024, 1, 4), date(2024, 1, 8)]
