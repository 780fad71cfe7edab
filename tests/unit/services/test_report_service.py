"""
Unit Tests for report windows and PDF rendering
"""
import pytest
from datetime import date

from taskreport.core.exceptions import ValidationError
from taskreport.models import TaskStatus
from taskreport.services.report_service import (
    ReportType,
    TaskReportPDF,
    generate_task_report,
    one_month_before,
    resolve_report_window,
)

TODAY = date(2024, 3, 31)


class TestResolveReportWindow:

    def test_daily(self):
        assert resolve_report_window(ReportType.DAILY, today=TODAY) == (TODAY, TODAY)

    def test_weekly(self):
        assert resolve_report_window(ReportType.WEEKLY, today=TODAY) == (date(2024, 3, 24), TODAY)

    def test_monthly_clamps_to_shorter_month(self):
        assert resolve_report_window(ReportType.MONTHLY, today=TODAY) == (date(2024, 2, 29), TODAY)

    def test_monthly_across_year_boundary(self):
        assert one_month_before(date(2024, 1, 15)) == date(2023, 12, 15)

    def test_custom(self):
        window = resolve_report_window(
            ReportType.CUSTOM, date(2024, 1, 1), date(2024, 1, 31), today=TODAY
        )

        assert window == (date(2024, 1, 1), date(2024, 1, 31))

    def test_custom_requires_both_dates(self):
        with pytest.raises(ValidationError):
            resolve_report_window(ReportType.CUSTOM, start_date=date(2024, 1, 1), today=TODAY)

    def test_explicit_dates_override_preset(self):
        window = resolve_report_window(ReportType.WEEKLY, start_date=date(2024, 3, 1), today=TODAY)

        assert window == (date(2024, 3, 1), TODAY)

    def test_start_after_end(self):
        with pytest.raises(ValidationError):
            resolve_report_window(ReportType.DAILY, start_date=date(2024, 4, 5), today=TODAY)


class TestTaskReportPDF:

    def test_empty_report_is_a_pdf(self):
        pdf = TaskReportPDF().build([], ReportType.DAILY, TODAY, TODAY)

        assert pdf.startswith(b"%PDF")

    @pytest.mark.asyncio
    async def test_generate_report_with_tasks(self, db_session, developer, task_factory):
        await task_factory(
            developer,
            date=date(2024, 3, 30),
            targets_given="Ship <reports> & fix\nthe export",
            status=TaskStatus.DEPENDENT,
        )
        await task_factory(developer, date=date(2024, 3, 1), project="Other")

        pdf = await generate_task_report(db_session, ReportType.WEEKLY, today=TODAY)

        assert pdf.startswith(b"%PDF")
        assert len(pdf) > 1000
