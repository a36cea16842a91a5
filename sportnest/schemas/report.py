from datetime import date as date_type, datetime
from pydantic import BaseModel
from typing import List, Optional

class ReportFilters(BaseModel):
    date_from: Optional[date_type] = None
    date_to: Optional[date_type] = None
    status: Optional[str] = None

class EventKpis(BaseModel):
    events: int = 0
    capacity: int = 0
    regs: int = 0

class StatusCount(BaseModel):
    status: str
    count: int

class MonthlyTrend(BaseModel):
    year: int
    month: int
    count: int
    capacity: int
    registrations: int

class VenueCount(BaseModel):
    venue: str
    count: int

class ApprovedEventRow(BaseModel):
    name: str
    venue: str
    date: str
    time: str
    capacity: int
    registered: int
    ratio: float

class EventsSummary(BaseModel):
    kpis: EventKpis
    by_status: List[StatusCount]
    trend: List[MonthlyTrend]
    top_venues: List[VenueCount]
    approved_list: List[ApprovedEventRow]

class EventExportRow(BaseModel):
    name: str
    description: str
    venue: str
    status: str
    date: str
    start_time: str
    end_time: str
    capacity: int
    registered: int
