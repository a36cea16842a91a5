from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from typing import Optional
from datetime import date, datetime
from io import BytesIO
import asyncio
from sportnest.api.deps import get_report_service
from sportnest.core.security import Caller, require_admin
from sportnest.schemas.report import EventsSummary, ReportFilters
from sportnest.services.event_reports import EventReportService
from sportnest.utils.csv_utils import generate_csv_from_data
from sportnest.utils.pdf_generator import generate_events_report_pdf

router = APIRouter()

EXPORT_HEADERS = [
    "name", "description", "venue", "status", "date",
    "start_time", "end_time", "capacity", "registered",
]

def report_filters(
    date_from: Optional[date] = Query(None, alias="from"),
    date_to: Optional[date] = Query(None, alias="to"),
    status: Optional[str] = Query(None, description="pending, approved or rejected"),
) -> ReportFilters:
    return ReportFilters(date_from=date_from, date_to=date_to, status=status or None)

@router.get("/summary", response_model=EventsSummary)
async def get_summary(
    filters: ReportFilters = Depends(report_filters),
    caller: Caller = Depends(require_admin),
    service: EventReportService = Depends(get_report_service),
):
    return await service.summary(filters)

@router.get("/export/csv")
async def export_csv(
    filters: ReportFilters = Depends(report_filters),
    caller: Caller = Depends(require_admin),
    service: EventReportService = Depends(get_report_service),
):
    rows = await service.export_rows(filters)
    preamble = [
        "SportNest Events Report",
        "Generated at", datetime.now().isoformat(timespec="seconds"),
        "Range", str(filters.date_from or ""), str(filters.date_to or ""),
    ]
    return await generate_csv_from_data(
        data=[row.model_dump() for row in rows],
        headers=EXPORT_HEADERS,
        filename="events_report.csv",
        preamble=preamble,
    )

@router.get("/export/pdf", response_class=StreamingResponse)
async def export_pdf(
    filters: ReportFilters = Depends(report_filters),
    caller: Caller = Depends(require_admin),
    service: EventReportService = Depends(get_report_service),
):
    summary = await service.summary(filters)

    output_buffer = BytesIO()
    await asyncio.to_thread(generate_events_report_pdf, summary, filters, output_buffer)
    output_buffer.seek(0)

    return StreamingResponse(
        output_buffer,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="events_report.pdf"'}
    )
