"""
SportNest - Test Configuration and Fixtures
"""
import os
from datetime import date, timedelta
from typing import AsyncGenerator

import pytest
from httpx import AsyncClient, ASGITransport

# Set testing environment
os.environ['SECRET_KEY'] = 'test-secret-key-for-testing-only'
os.environ['MONGO_URI'] = 'mongodb://localhost:27017'
os.environ['MONGO_DB_NAME'] = 'sportnest_test'

from sportnest.main import app
from sportnest.api.deps import (
    get_admins_repository,
    get_events_repository,
    get_members_repository,
    get_workflow_service,
)
from sportnest.core.security import Caller, create_access_token, hash_password
from sportnest.schemas.event import EventDraft
from sportnest.services.event_workflow import EventWorkflowService
from mocks.repositories import InMemoryAccountsRepository, InMemoryEventsRepository

# Pinned so date-window rules do not depend on when the suite runs
TODAY = date(2030, 1, 15)

ADMIN_ID = "admin-1"
ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "adminpassword123"


@pytest.fixture
def events_repo() -> InMemoryEventsRepository:
    return InMemoryEventsRepository()


@pytest.fixture
def service(events_repo) -> EventWorkflowService:
    return EventWorkflowService(events_repo, today=lambda: TODAY)


@pytest.fixture
def member() -> Caller:
    return Caller(id="member-1", role="member")


@pytest.fixture
def other_member() -> Caller:
    return Caller(id="member-2", role="member")


@pytest.fixture
def admin() -> Caller:
    return Caller(id=ADMIN_ID, role="admin")


@pytest.fixture
def make_draft():
    """Build a valid draft; keyword overrides replace individual fields."""
    def _make(**overrides) -> EventDraft:
        data = {
            "name": "5K Run",
            "description": "Club fun run",
            "venue": "Main Track",
            "venue_facilities": ["Changing rooms"],
            "requested_items": [{"item": "Cones", "qty": 20}],
            "capacity": 10,
            "date": TODAY + timedelta(days=7),
            "start_time": "08:00",
            "end_time": "10:00",
            "registration_fee": 0,
        }
        data.update(overrides)
        return EventDraft(**data)
    return _make


@pytest.fixture
def members_repo() -> InMemoryAccountsRepository:
    return InMemoryAccountsRepository()


@pytest.fixture
def admins_repo() -> InMemoryAccountsRepository:
    return InMemoryAccountsRepository([{
        "_id": ADMIN_ID,
        "email": ADMIN_EMAIL,
        "hashed_password": hash_password(ADMIN_PASSWORD),
        "role": "admin",
    }])


@pytest.fixture
async def client(events_repo, service, members_repo, admins_repo) -> AsyncGenerator[AsyncClient, None]:
    """Create test client backed by the in-memory repositories"""
    app.dependency_overrides[get_events_repository] = lambda: events_repo
    app.dependency_overrides[get_workflow_service] = lambda: service
    app.dependency_overrides[get_members_repository] = lambda: members_repo
    app.dependency_overrides[get_admins_repository] = lambda: admins_repo

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


def _auth_headers(caller: Caller) -> dict:
    token = create_access_token({'_id': caller.id, 'role': caller.role})
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def member_headers(member) -> dict:
    return _auth_headers(member)


@pytest.fixture
def other_member_headers(other_member) -> dict:
    return _auth_headers(other_member)


@pytest.fixture
def admin_headers(admin) -> dict:
    return _auth_headers(admin)
