"""
Task report generation.

Resolves a report window (daily / weekly / monthly / custom), loads the
matching tasks and renders them as a landscape PDF table with reportlab.
"""

from reportlab.lib import colors
from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from sqlalchemy.ext.asyncio import AsyncSession
from calendar import monthrange
from datetime import date, datetime, timedelta
from io import BytesIO
from typing import List, Optional, Sequence, Tuple
import enum

from taskreport.core.exceptions import ValidationError
from taskreport.core.logging_config import logger
from taskreport.models import Task
from taskreport.services import task_service


class ReportType(str, enum.Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"


REPORT_COLUMNS = [
    "Developer", "Date", "Project", "Role", "Team",
    "Targets Given", "Targets Achieved", "Status",
]


def one_month_before(day: date) -> date:
    """Same day of the previous month, clamped to that month's length"""
    year, month = (day.year, day.month - 1) if day.month > 1 else (day.year - 1, 12)
    return date(year, month, min(day.day, monthrange(year, month)[1]))


def resolve_report_window(
    report_type: ReportType,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    today: Optional[date] = None,
) -> Tuple[date, date]:
    """
    Compute the inclusive date window for a report.

    Explicit start/end dates override the preset window of any type; the
    custom type requires both.
    """
    today = today or date.today()

    if report_type == ReportType.DAILY:
        start, end = today, today
    elif report_type == ReportType.WEEKLY:
        start, end = today - timedelta(days=7), today
    elif report_type == ReportType.MONTHLY:
        start, end = one_month_before(today), today
    else:
        if start_date is None or end_date is None:
            raise ValidationError("Custom reports require start_date and end_date")
        start, end = start_date, end_date

    start = start_date or start
    end = end_date or end
    task_service.validate_date_range(start, end)
    return start, end


class TaskReportPDF:
    """Render a list of tasks as a PDF table"""

    def __init__(self):
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _setup_custom_styles(self):
        self.styles.add(ParagraphStyle(
            name='ReportTitle',
            parent=self.styles['Title'],
            fontSize=18,
            textColor=HexColor('#1a1a1a'),
            spaceAfter=6,
            fontName='Helvetica-Bold'
        ))

        self.styles.add(ParagraphStyle(
            name='ReportMeta',
            parent=self.styles['Normal'],
            fontSize=10,
            textColor=HexColor('#4a4a4a'),
            spaceAfter=4,
            fontName='Helvetica'
        ))

        # Wrapping cell text; long target descriptions would overflow a plain string cell
        self.styles.add(ParagraphStyle(
            name='TableCell',
            parent=self.styles['Normal'],
            fontSize=8,
            leading=10,
            textColor=HexColor('#333333'),
            fontName='Helvetica'
        ))

    def _cell(self, value) -> Paragraph:
        text = "" if value is None else str(value)
        text = text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
        return Paragraph(text.replace("\n", "<br/>"), self.styles['TableCell'])

    def _row(self, task: Task) -> List:
        status = task.status.value if task.status else ""
        return [
            self._cell(task.developer_name),
            self._cell(task.date.isoformat() if task.date else ""),
            self._cell(task.project),
            self._cell(task.role),
            self._cell(task.team),
            self._cell(task.targets_given),
            self._cell(task.targets_achieved),
            self._cell(status),
        ]

    def build(
        self,
        tasks: Sequence[Task],
        report_type: ReportType,
        start_date: date,
        end_date: date,
        project: Optional[str] = None,
    ) -> bytes:
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=landscape(A4),
            leftMargin=0.5 * inch,
            rightMargin=0.5 * inch,
            topMargin=0.5 * inch,
            bottomMargin=0.5 * inch,
            title=f"Tasks Report - {report_type.value}",
        )

        story = [
            Paragraph(f"Tasks Report - {report_type.value}", self.styles['ReportTitle']),
            Paragraph(
                f"Period: {start_date.isoformat()} to {end_date.isoformat()}"
                + (f" | Project: {project}" if project else ""),
                self.styles['ReportMeta']
            ),
            Paragraph(
                f"Generated: {datetime.utcnow().strftime('%Y-%m-%d %H:%M')} UTC | Tasks: {len(tasks)}",
                self.styles['ReportMeta']
            ),
            Spacer(1, 0.2 * inch),
        ]

        data = [REPORT_COLUMNS] + [self._row(task) for task in tasks]
        col_widths = [1.3, 0.85, 1.2, 0.8, 0.7, 2.35, 2.35, 1.05]
        table = Table(data, colWidths=[w * inch for w in col_widths], repeatRows=1)
        table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), HexColor('#2c3e50')),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, 0), 9),
            ('VALIGN', (0, 0), (-1, -1), 'TOP'),
            ('GRID', (0, 0), (-1, -1), 0.5, HexColor('#bdc3c7')),
            ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, HexColor('#f5f7fa')]),
            ('BOTTOMPADDING', (0, 0), (-1, 0), 6),
        ]))
        story.append(table)

        if not tasks:
            story.append(Spacer(1, 0.2 * inch))
            story.append(Paragraph("No tasks were submitted in this period.", self.styles['ReportMeta']))

        doc.build(story)
        return buffer.getvalue()


async def generate_task_report(
    db: AsyncSession,
    report_type: ReportType,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    project: Optional[str] = None,
    today: Optional[date] = None,
) -> bytes:
    """Load the tasks for the resolved window and render the PDF"""
    start, end = resolve_report_window(report_type, start_date, end_date, today=today)
    tasks, total = await task_service.list_tasks(db, start_date=start, end_date=end, project=project)

    # Oldest first reads naturally in a printed report
    tasks.sort(key=lambda t: (t.date, t.developer_name or "", t.id))

    pdf = TaskReportPDF().build(tasks, report_type, start, end, project=project)
    logger.info(
        f"Generated {report_type.value} report: {total} tasks, {len(pdf)} bytes",
        extra={
            "event_type": "report",
            "report_type": report_type.value,
            "start_date": start.isoformat(),
            "end_date": end.isoformat(),
            "task_count": total,
        }
    )
    return pdf
