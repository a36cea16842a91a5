from functools import lru_cache
from fastapi import Depends
from sportnest.db.repository.admins import AdminsRepository
from sportnest.db.repository.events import EventsRepository
from sportnest.db.repository.members import MembersRepository
from sportnest.services.event_reports import EventReportService
from sportnest.services.event_workflow import EventWorkflowService

@lru_cache
def get_events_repository() -> EventsRepository:
    return EventsRepository()

@lru_cache
def get_members_repository() -> MembersRepository:
    return MembersRepository()

@lru_cache
def get_admins_repository() -> AdminsRepository:
    return AdminsRepository()

def get_workflow_service(repository=Depends(get_events_repository)) -> EventWorkflowService:
    return EventWorkflowService(repository)

def get_report_service(repository=Depends(get_events_repository)) -> EventReportService:
    return EventReportService(repository)
