from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
import enum

class EventStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

class RequestedItem(BaseModel):
    item: str
    qty: int

class Registration(BaseModel):
    name: str
    email: str
    phone: Optional[str] = ""
    registered_at: Optional[datetime] = None

class Event(BaseModel):
    id: str = Field(alias="_id")  # Use alias to map _id in the database to id in the model
    name: str
    description: str = ""
    venue: str
    venue_facilities: List[str] = []
    requested_items: List[RequestedItem] = []
    capacity: int
    registration_fee: float = 0
    date: datetime
    start_time: str
    end_time: str
    status: EventStatus = EventStatus.PENDING
    registrations: List[Registration] = []
    submitted_by: Optional[str] = None
    moderated_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        populate_by_name = True  # Allow using both id and _id

    @property
    def registered_count(self) -> int:
        return len(self.registrations)

    @property
    def is_full(self) -> bool:
        return self.registered_count >= self.capacity
