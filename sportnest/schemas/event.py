from datetime import date as date_type, datetime
from pydantic import BaseModel, Field
from typing import List, Optional
from sportnest.models.event import Event, EventStatus, Registration

class RequestedItemIn(BaseModel):
    item: str = ""
    qty: int = 0

class EventDraft(BaseModel):
    name: str = ""
    description: str = ""
    venue: str = ""
    venue_facilities: List[str] = []
    requested_items: List[RequestedItemIn] = []
    capacity: Optional[int] = None
    date: Optional[date_type] = None
    start_time: str = ""
    end_time: str = ""
    registration_fee: Optional[float] = Field(0, allow_inf_nan=False)

class EventPatch(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    venue: Optional[str] = None
    venue_facilities: Optional[List[str]] = None
    requested_items: Optional[List[RequestedItemIn]] = None
    capacity: Optional[int] = None
    date: Optional[date_type] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    registration_fee: Optional[float] = Field(None, allow_inf_nan=False)
    # Honoured for admins only
    status: Optional[EventStatus] = None

class RegistrantIn(BaseModel):
    name: str = ""
    email: str = ""
    phone: Optional[str] = ""

class RegistrationResult(BaseModel):
    message: str = "Registered"
    registered_count: int
    capacity: int

class RequestedItemOut(BaseModel):
    item: str
    qty: int

class EventOut(BaseModel):
    id: str
    name: str
    description: str
    venue: str
    venue_facilities: List[str]
    requested_items: List[RequestedItemOut]
    capacity: int
    registration_fee: float
    date: date_type
    start_time: str
    end_time: str
    status: EventStatus
    registrations: List[Registration]
    registered_count: int
    is_full: bool
    submitted_by: Optional[str] = None
    moderated_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_event(cls, event: Event) -> "EventOut":
        data = event.model_dump()
        data["date"] = event.date.date()
        return cls(**data, registered_count=event.registered_count, is_full=event.is_full)

class ModerationPage(BaseModel):
    items: List[EventOut]
    total: int
    page: int
    limit: int
