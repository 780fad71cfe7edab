"""
Daily submission tracking: which days a developer filed a report, and which
working days are still missing one.
"""
from datetime import date, timedelta
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Iterator, List, Optional, Tuple

from taskreport.core.config import settings
from taskreport.core.exceptions import ValidationError
from taskreport.models import Developer, DEFAULT_WORKING_DAYS
from taskreport.schemas.task import SubmissionStatus
from taskreport.services import task_service

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def resolve_window(
    start_date: Optional[date],
    end_date: Optional[date],
    today: Optional[date] = None,
) -> Tuple[date, date]:
    """Default to the last SUBMISSION_WINDOW_DAYS days ending today"""
    today = today or date.today()
    end = end_date or today
    start = start_date or end - timedelta(days=settings.SUBMISSION_WINDOW_DAYS - 1)

    task_service.validate_date_range(start, end)
    if (end - start).days + 1 > settings.MAX_SUBMISSION_SPAN_DAYS:
        raise ValidationError(
            f"Date range cannot exceed {settings.MAX_SUBMISSION_SPAN_DAYS} days",
            field="end_date",
        )
    return start, end


def iter_days(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def is_working_day(day: date, working_days: Optional[List[str]]) -> bool:
    return WEEKDAY_NAMES[day.weekday()] in (working_days or DEFAULT_WORKING_DAYS)


async def submission_status(
    db: AsyncSession,
    developer_id: int,
    start_date: date,
    end_date: date,
) -> List[SubmissionStatus]:
    """One entry per calendar day in the range"""
    submitted = await task_service.submitted_dates(db, developer_id, start_date, end_date)
    return [
        SubmissionStatus(date=day, submitted=day in submitted)
        for day in iter_days(start_date, end_date)
    ]


async def missing_reports(
    db: AsyncSession,
    developer: Developer,
    start_date: date,
    end_date: date,
) -> List[date]:
    """Working days in the range with no task filed"""
    submitted = await task_service.submitted_dates(db, developer.id, start_date, end_date)
    return [
        day for day in iter_days(start_date, end_date)
        if day not in submitted and is_working_day(day, developer.working_days)
    ]
