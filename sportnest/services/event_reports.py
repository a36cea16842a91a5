"""Summary statistics over stored events.

`build_summary` is the single aggregate behind the JSON summary and the PDF
export; `build_export_rows` flattens the same documents for CSV.
"""

import logging
from collections import Counter, defaultdict
from typing import Any, Dict, Iterable, List, Optional

from sportnest.models.event import EventStatus
from sportnest.schemas.report import (
    ApprovedEventRow,
    EventExportRow,
    EventKpis,
    EventsSummary,
    MonthlyTrend,
    ReportFilters,
    StatusCount,
    VenueCount,
)

logger = logging.getLogger(__name__)

TOP_VENUES_LIMIT = 8
APPROVED_LIST_LIMIT = 50


def _registered(doc: Dict[str, Any]) -> int:
    return len(doc.get("registrations") or [])


def _day(doc: Dict[str, Any]) -> str:
    value = doc.get("date")
    return value.strftime("%Y-%m-%d") if value else ""


def _schedule_key(doc: Dict[str, Any]):
    return (_day(doc), doc.get("start_time") or "")


def build_summary(events: Iterable[Dict[str, Any]], status: Optional[str] = None) -> EventsSummary:
    """Aggregate event documents already narrowed to the report's date range.

    `status` narrows the KPIs, status counts, trend and venues. The approved
    list always covers approved events in the range, matching what the
    dashboards show next to the filtered figures.
    """
    events = list(events)
    selected = [doc for doc in events if not status or doc.get("status") == status]

    kpis = EventKpis(
        events=len(selected),
        capacity=sum(doc.get("capacity") or 0 for doc in selected),
        regs=sum(_registered(doc) for doc in selected),
    )

    status_counts = Counter(doc.get("status") or "unknown" for doc in selected)
    by_status = [
        StatusCount(status=name, count=count)
        for name, count in sorted(status_counts.items(), key=lambda kv: (-kv[1], kv[0]))
    ]

    months: Dict[tuple, Dict[str, int]] = defaultdict(lambda: {"count": 0, "capacity": 0, "registrations": 0})
    for doc in selected:
        if not doc.get("date"):
            continue
        bucket = months[(doc["date"].year, doc["date"].month)]
        bucket["count"] += 1
        bucket["capacity"] += doc.get("capacity") or 0
        bucket["registrations"] += _registered(doc)
    trend = [
        MonthlyTrend(year=year, month=month, **totals)
        for (year, month), totals in sorted(months.items())
    ]

    venue_counts = Counter(doc.get("venue") or "-" for doc in selected)
    top_venues = [
        VenueCount(venue=venue, count=count)
        for venue, count in sorted(venue_counts.items(), key=lambda kv: (-kv[1], kv[0]))[:TOP_VENUES_LIMIT]
    ]

    approved = sorted(
        (doc for doc in events if doc.get("status") == EventStatus.APPROVED.value),
        key=_schedule_key,
    )[:APPROVED_LIST_LIMIT]
    approved_list = []
    for doc in approved:
        capacity = doc.get("capacity") or 0
        registered = _registered(doc)
        approved_list.append(ApprovedEventRow(
            name=doc.get("name") or "-",
            venue=doc.get("venue") or "-",
            date=_day(doc),
            time="–".join(t for t in (doc.get("start_time"), doc.get("end_time")) if t),
            capacity=capacity,
            registered=registered,
            ratio=round(registered / capacity, 4) if capacity else 0.0,
        ))

    return EventsSummary(
        kpis=kpis,
        by_status=by_status,
        trend=trend,
        top_venues=top_venues,
        approved_list=approved_list,
    )


def build_export_rows(events: Iterable[Dict[str, Any]], status: Optional[str] = None) -> List[EventExportRow]:
    rows = []
    for doc in sorted(events, key=_schedule_key):
        if status and doc.get("status") != status:
            continue
        rows.append(EventExportRow(
            name=doc.get("name") or "",
            description=doc.get("description") or "",
            venue=doc.get("venue") or "",
            status=doc.get("status") or "",
            date=_day(doc),
            start_time=doc.get("start_time") or "",
            end_time=doc.get("end_time") or "",
            capacity=doc.get("capacity") or 0,
            registered=_registered(doc),
        ))
    return rows


class EventReportService:
    """Fetches the events for a report window and hands them to the builders."""

    def __init__(self, repository) -> None:
        self.repository = repository

    async def _events_in_range(self, filters: ReportFilters) -> List[Dict[str, Any]]:
        events = await self.repository.list_in_date_range(filters.date_from, filters.date_to)
        logger.info(
            f"Report over {len(events)} events "
            f"(from={filters.date_from}, to={filters.date_to}, status={filters.status or 'any'})"
        )
        return events

    async def summary(self, filters: ReportFilters) -> EventsSummary:
        return build_summary(await self._events_in_range(filters), filters.status)

    async def export_rows(self, filters: ReportFilters) -> List[EventExportRow]:
        return build_export_rows(await self._events_in_range(filters), filters.status)
