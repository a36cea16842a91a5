from fastapi import APIRouter, Depends, Query, Response, status
from typing import List, Optional
from sportnest.api.deps import get_workflow_service
from sportnest.core.security import Caller, get_current_caller
from sportnest.schemas.event import (
    EventDraft, EventOut, EventPatch, ModerationPage, RegistrantIn, RegistrationResult
)
from sportnest.services.event_workflow import EventWorkflowService

router = APIRouter()

# Fixed paths are declared before "/{event_id}" so they are not captured by it

@router.get("/approved", response_model=List[EventOut])
async def list_approved_events(
    q: Optional[str] = Query(None, description="Search in event name and venue"),
    service: EventWorkflowService = Depends(get_workflow_service),
):
    events = await service.list_approved(q)
    return [EventOut.from_event(event) for event in events]

@router.post("/submit", response_model=EventOut, status_code=status.HTTP_201_CREATED)
async def submit_event(
    draft: EventDraft,
    caller: Caller = Depends(get_current_caller),
    service: EventWorkflowService = Depends(get_workflow_service),
):
    event = await service.submit(draft, caller.id)
    return EventOut.from_event(event)

@router.get("/mine", response_model=List[EventOut])
async def list_my_events(
    caller: Caller = Depends(get_current_caller),
    service: EventWorkflowService = Depends(get_workflow_service),
):
    events = await service.list_mine(caller.id)
    return [EventOut.from_event(event) for event in events]

@router.get("/", response_model=ModerationPage)
async def list_events_for_moderation(
    status_filter: Optional[str] = Query(None, alias="status", description="pending, approved or rejected"),
    q: Optional[str] = Query(None, description="Search in event name and venue"),
    sort: str = Query("date", description="date, name, capacity or created_at"),
    order: str = Query("asc", description="asc or desc"),
    page: int = Query(1),
    limit: int = Query(10),
    caller: Caller = Depends(get_current_caller),
    service: EventWorkflowService = Depends(get_workflow_service),
):
    return await service.list_for_moderation(
        caller, status=status_filter, query=q, sort=sort, order=order, page=page, limit=limit
    )

@router.patch("/{event_id}/approve", response_model=EventOut)
async def approve_event(
    event_id: str,
    caller: Caller = Depends(get_current_caller),
    service: EventWorkflowService = Depends(get_workflow_service),
):
    return EventOut.from_event(await service.approve(event_id, caller))

@router.patch("/{event_id}/reject", response_model=EventOut)
async def reject_event(
    event_id: str,
    caller: Caller = Depends(get_current_caller),
    service: EventWorkflowService = Depends(get_workflow_service),
):
    return EventOut.from_event(await service.reject(event_id, caller))

@router.post("/{event_id}/register", response_model=RegistrationResult)
async def register_for_event(
    event_id: str,
    registrant: RegistrantIn,
    service: EventWorkflowService = Depends(get_workflow_service),
):
    return await service.register(event_id, registrant)

@router.put("/{event_id}", response_model=EventOut)
async def update_event(
    event_id: str,
    patch: EventPatch,
    caller: Caller = Depends(get_current_caller),
    service: EventWorkflowService = Depends(get_workflow_service),
):
    return EventOut.from_event(await service.update(event_id, caller, patch))

@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: str,
    caller: Caller = Depends(get_current_caller),
    service: EventWorkflowService = Depends(get_workflow_service),
):
    await service.delete(event_id, caller)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{event_id}", response_model=EventOut)
async def get_single_event(
    event_id: str,
    service: EventWorkflowService = Depends(get_workflow_service),
):
    return EventOut.from_event(await service.get(event_id))
