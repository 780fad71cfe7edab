from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import date
from typing import Optional

from taskreport.core.database import get_db
from taskreport.modules.auth.dependencies import get_current_admin
from taskreport.modules.auth.identity import Identity
from taskreport.services.report_service import ReportType, generate_task_report

router = APIRouter()


@router.get(
    "/{report_type}",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
async def download_report(
    report_type: ReportType,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    project: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
    current_admin: Identity = Depends(get_current_admin)
):
    """Tasks report as a PDF (daily, weekly, monthly or custom range)"""
    pdf = await generate_task_report(
        db,
        report_type,
        start_date=start_date,
        end_date=end_date,
        project=project,
    )

    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="{report_type.value}_tasks_report.pdf"'},
    )
