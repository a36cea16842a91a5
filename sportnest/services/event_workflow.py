"""Event workflow - lifecycle and capacity rules for club events.

Submission creates a pending event, admins moderate it, anyone may register
while slots remain, and the submitter keeps edit/delete rights until the event
is approved. Permission checks take an explicit Caller; the HTTP layer only
resolves who the caller is.
"""

import logging
from datetime import date, datetime, time, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple
from uuid import uuid4

from dateutil.relativedelta import relativedelta

from sportnest.core.errors import (
    CapacityExceededError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from sportnest.core.security import Caller
from sportnest.models.event import Event, EventStatus
from sportnest.schemas.event import (
    EventDraft,
    EventPatch,
    ModerationPage,
    EventOut,
    RegistrantIn,
    RegistrationResult,
    RequestedItemIn,
)

logger = logging.getLogger(__name__)

MAX_CAPACITY = 500
MAX_PAGE_SIZE = 100
SUBMISSION_WINDOW = relativedelta(months=3)
TIME_FORMAT = "%H:%M"

# Sort keys accepted by the moderation listing, with their tie-breakers
SORT_FIELDS = {
    "date": ["date", "start_time"],
    "name": ["name"],
    "capacity": ["capacity"],
    "created_at": ["created_at"],
}
SORT_ORDERS = {"asc": 1, "desc": -1}


def _trim(value: Optional[str]) -> str:
    return value.strip() if isinstance(value, str) else ""


def _clean_facilities(facilities: List[str]) -> List[str]:
    return [_trim(f) for f in facilities if _trim(f)]


def _clean_items(items: List[RequestedItemIn]) -> List[Dict[str, Any]]:
    return [
        {"item": _trim(entry.item), "qty": entry.qty}
        for entry in items
        if _trim(entry.item) and entry.qty > 0
    ]


def _clamp_fee(fee: Optional[float]) -> float:
    return max(0.0, float(fee or 0))


def _parse_time(value: str) -> Optional[time]:
    try:
        return datetime.strptime(value, TIME_FORMAT).time()
    except (TypeError, ValueError):
        return None


def _check_times(start: str, end: str, errors: List[str]) -> Tuple[str, str]:
    """Validate a start/end pair and return both zero-padded as HH:MM."""
    if not start or not end:
        errors.append("Start and end time are required")
        return start, end
    start_at, end_at = _parse_time(start), _parse_time(end)
    if start_at is None or end_at is None:
        errors.append("Start and end time must use HH:MM")
        return start, end
    if end_at <= start_at:
        errors.append("End time must be after start time")
    return start_at.strftime(TIME_FORMAT), end_at.strftime(TIME_FORMAT)


def _to_storage_date(value: date) -> datetime:
    # MongoDB has no date-only type
    return datetime.combine(value, datetime.min.time())


class EventWorkflowService:
    """Owns every state transition and the capacity rule for events."""

    def __init__(self, repository, today: Callable[[], date] = date.today) -> None:
        self.repository = repository
        self._today = today

    async def submit(self, draft: EventDraft, submitter_id: Optional[str]) -> Event:
        """Validate a draft and store it as a pending event.

        Raises:
            ValidationError: listing every problem found in the draft.
        """
        errors: List[str] = []
        name = _trim(draft.name)
        venue = _trim(draft.venue)
        start_time = _trim(draft.start_time)
        end_time = _trim(draft.end_time)
        capacity = draft.capacity or 0

        if not name:
            errors.append("Event name is required")
        if not venue:
            errors.append("Venue is required")

        if capacity < 1:
            errors.append("Capacity must be at least 1")
        elif capacity > MAX_CAPACITY:
            errors.append(f"Capacity must be ≤ {MAX_CAPACITY}")

        if draft.date is None:
            errors.append("Date is required")
        else:
            today = self._today()
            if draft.date < today:
                errors.append("Date cannot be in the past")
            elif draft.date > today + SUBMISSION_WINDOW:
                errors.append("Date must be within the next 3 months")

        start_time, end_time = _check_times(start_time, end_time, errors)

        if errors:
            raise ValidationError.from_errors(errors)

        now = datetime.now(timezone.utc)
        event_dict = {
            "_id": str(uuid4()),
            "name": name,
            "description": _trim(draft.description),
            "venue": venue,
            "venue_facilities": _clean_facilities(draft.venue_facilities),
            "requested_items": _clean_items(draft.requested_items),
            "capacity": capacity,
            "registration_fee": _clamp_fee(draft.registration_fee),
            "date": _to_storage_date(draft.date),
            "start_time": start_time,
            "end_time": end_time,
            "status": EventStatus.PENDING.value,
            "registrations": [],
            "submitted_by": submitter_id,
            "moderated_by": None,
            "created_at": now,
            "updated_at": now,
        }
        await self.repository.insert(event_dict)
        logger.info(f"Event {event_dict['_id']} submitted by {submitter_id}")
        return Event(**event_dict)

    async def list_approved(self, query: Optional[str] = None) -> List[Event]:
        docs = await self.repository.list_events(
            status=EventStatus.APPROVED.value,
            search=query,
            sort=[("date", 1), ("start_time", 1)],
        )
        return [Event(**doc) for doc in docs]

    async def get(self, event_id: str) -> Event:
        doc = await self.repository.get(event_id)
        if not doc:
            raise NotFoundError(event_id)
        return Event(**doc)

    async def register(self, event_id: str, registrant: RegistrantIn) -> RegistrationResult:
        """Append a registrant while the event still has a free slot.

        The slot check and the append are a single conditional update in the
        store, so concurrent callers cannot overbook the event.

        Raises:
            ValidationError: name or email missing.
            NotFoundError: no such event.
            CapacityExceededError: every slot is taken.
        """
        name = _trim(registrant.name)
        email = _trim(registrant.email)
        if not name or not email:
            raise ValidationError("Name and email are required")

        registration = {
            "name": name,
            "email": email,
            "phone": _trim(registrant.phone),
            "registered_at": datetime.now(timezone.utc),
        }
        doc = await self.repository.push_registration(event_id, registration)
        if doc is None:
            if not await self.repository.exists(event_id):
                raise NotFoundError(event_id)
            logger.warning(f"Registration refused for full event {event_id}")
            raise CapacityExceededError(event_id)

        registered_count = len(doc["registrations"])
        logger.info(f"Registered {email} for event {event_id} ({registered_count}/{doc['capacity']})")
        return RegistrationResult(registered_count=registered_count, capacity=doc["capacity"])

    async def list_mine(self, submitter_id: str) -> List[Event]:
        docs = await self.repository.list_events(
            submitted_by=submitter_id,
            sort=[("created_at", -1)],
        )
        return [Event(**doc) for doc in docs]

    async def list_for_moderation(
        self,
        caller: Caller,
        status: Optional[str] = None,
        query: Optional[str] = None,
        sort: str = "date",
        order: str = "asc",
        page: int = 1,
        limit: int = 10,
    ) -> ModerationPage:
        self._ensure_admin(caller)

        errors: List[str] = []
        if status and status not in {s.value for s in EventStatus}:
            errors.append(f"Unknown status '{status}'")
        if sort not in SORT_FIELDS:
            errors.append(f"Cannot sort by '{sort}'")
        if order not in SORT_ORDERS:
            errors.append("Order must be 'asc' or 'desc'")
        if page < 1:
            errors.append("Page must be at least 1")
        if limit < 1 or limit > MAX_PAGE_SIZE:
            errors.append(f"Limit must be between 1 and {MAX_PAGE_SIZE}")
        if errors:
            raise ValidationError.from_errors(errors)

        direction = SORT_ORDERS[order]
        sort_spec = [(field, direction) for field in SORT_FIELDS[sort]] + [("_id", 1)]
        docs = await self.repository.list_events(
            status=status or None,
            search=query,
            sort=sort_spec,
            skip=(page - 1) * limit,
            limit=limit,
        )
        total = await self.repository.count_events(status=status or None, search=query)
        return ModerationPage(
            items=[EventOut.from_event(Event(**doc)) for doc in docs],
            total=total,
            page=page,
            limit=limit,
        )

    async def approve(self, event_id: str, caller: Caller) -> Event:
        return await self._moderate(event_id, caller, EventStatus.APPROVED)

    async def reject(self, event_id: str, caller: Caller) -> Event:
        return await self._moderate(event_id, caller, EventStatus.REJECTED)

    async def update(self, event_id: str, caller: Caller, patch: EventPatch) -> Event:
        """Apply a field-level patch.

        Submitters may edit only until the event is approved; admins always may.

        Raises:
            NotFoundError, ForbiddenError, ValidationError
        """
        existing = await self.get(event_id)
        self._ensure_can_modify(existing, caller, "edit")

        changes = patch.model_dump(exclude_unset=True)
        update_data: Dict[str, Any] = {}
        errors: List[str] = []

        for field, label in (("name", "Event name"), ("venue", "Venue")):
            if field in changes:
                value = _trim(changes[field])
                if not value:
                    errors.append(f"{label} is required")
                else:
                    update_data[field] = value

        if "description" in changes:
            update_data["description"] = _trim(changes["description"])
        if patch.venue_facilities is not None:
            update_data["venue_facilities"] = _clean_facilities(patch.venue_facilities)
        if patch.requested_items is not None:
            update_data["requested_items"] = _clean_items(patch.requested_items)

        if "capacity" in changes:
            capacity = changes["capacity"]
            if capacity is None or capacity < 1:
                errors.append("Capacity must be at least 1")
            elif capacity < existing.registered_count:
                errors.append(
                    f"Capacity cannot be less than current registrations ({existing.registered_count})"
                )
            elif capacity > MAX_CAPACITY:
                errors.append(f"Capacity must be ≤ {MAX_CAPACITY}")
            else:
                update_data["capacity"] = capacity

        if "date" in changes:
            if patch.date is None:
                errors.append("Date is required")
            else:
                update_data["date"] = _to_storage_date(patch.date)

        if "start_time" in changes or "end_time" in changes:
            start_time = _trim(changes.get("start_time", existing.start_time))
            end_time = _trim(changes.get("end_time", existing.end_time))
            start_time, end_time = _check_times(start_time, end_time, errors)
            update_data["start_time"] = start_time
            update_data["end_time"] = end_time

        if "registration_fee" in changes:
            update_data["registration_fee"] = _clamp_fee(patch.registration_fee)

        # Submitters cannot touch workflow fields
        if caller.is_admin and patch.status is not None:
            update_data["status"] = patch.status.value
            update_data["moderated_by"] = caller.id

        if errors:
            raise ValidationError.from_errors(errors)

        update_data["updated_at"] = datetime.now(timezone.utc)
        doc = await self.repository.set_fields(
            event_id, update_data, unless_status=self._locked_status(caller)
        )
        if doc is None:
            # The event changed between the read and the write
            current = await self.get(event_id)
            self._ensure_can_modify(current, caller, "edit")
            raise ValidationError("Capacity cannot be less than current registrations")

        logger.info(f"Event {event_id} updated by {caller.role} {caller.id}: {sorted(update_data)}")
        return Event(**doc)

    async def delete(self, event_id: str, caller: Caller) -> None:
        existing = await self.get(event_id)
        self._ensure_can_modify(existing, caller, "delete")

        if not await self.repository.delete(event_id, unless_status=self._locked_status(caller)):
            current = await self.get(event_id)
            self._ensure_can_modify(current, caller, "delete")
            raise NotFoundError(event_id)
        logger.info(f"Event {event_id} deleted by {caller.role} {caller.id}")

    async def _moderate(self, event_id: str, caller: Caller, status: EventStatus) -> Event:
        # Free transition between the three states; repeating is a no-op
        self._ensure_admin(caller)
        doc = await self.repository.set_fields(event_id, {
            "status": status.value,
            "moderated_by": caller.id,
            "updated_at": datetime.now(timezone.utc),
        })
        if doc is None:
            raise NotFoundError(event_id)
        logger.info(f"Event {event_id} {status.value} by admin {caller.id}")
        return Event(**doc)

    @staticmethod
    def _locked_status(caller: Caller) -> Optional[str]:
        # Writes by submitters must not land on an event approved meanwhile
        return None if caller.is_admin else EventStatus.APPROVED.value

    @staticmethod
    def _ensure_admin(caller: Caller) -> None:
        if not caller.is_admin:
            raise ForbiddenError("Admin access required")

    @staticmethod
    def _ensure_can_modify(event: Event, caller: Caller, action: str) -> None:
        if caller.is_admin:
            return
        if not caller.id or caller.id != event.submitted_by:
            raise ForbiddenError(f"Not allowed to {action} this event")
        if event.status == EventStatus.APPROVED:
            raise ForbiddenError(f"Approved events are locked; only an admin can {action} them")
