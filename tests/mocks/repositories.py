"""
In-memory stand-ins for the Mongo repositories.

They expose the same coroutine methods as the real repositories so services
and routes can run without a database.
"""
import asyncio
import copy
from datetime import datetime


class InMemoryEventsRepository:
    """Events store that mirrors EventsRepository semantics in Python."""

    def __init__(self):
        self.documents = {}
        # Stands in for MongoDB's single-document atomicity
        self._lock = asyncio.Lock()

    @staticmethod
    def _matches(doc, status=None, search=None, submitted_by=None):
        if status and doc.get("status") != status:
            return False
        if submitted_by and doc.get("submitted_by") != submitted_by:
            return False
        if search and search.strip():
            needle = search.strip().lower()
            if needle not in doc.get("name", "").lower() and needle not in doc.get("venue", "").lower():
                return False
        return True

    @staticmethod
    def _sorted(docs, sort):
        docs = list(docs)
        for field, direction in reversed(sort or []):
            docs.sort(key=lambda d: d.get(field), reverse=direction == -1)
        return docs

    async def insert(self, event):
        self.documents[event["_id"]] = copy.deepcopy(event)
        return event["_id"]

    async def get(self, event_id):
        doc = self.documents.get(event_id)
        return copy.deepcopy(doc) if doc else None

    async def exists(self, event_id):
        return event_id in self.documents

    async def list_events(self, status=None, search=None, submitted_by=None, sort=None, skip=0, limit=0):
        docs = [d for d in self.documents.values() if self._matches(d, status, search, submitted_by)]
        docs = self._sorted(docs, sort)[skip:]
        if limit:
            docs = docs[:limit]
        return copy.deepcopy(docs)

    async def count_events(self, status=None, search=None, submitted_by=None):
        return len([d for d in self.documents.values() if self._matches(d, status, search, submitted_by)])

    async def list_in_date_range(self, date_from=None, date_to=None, sort=None):
        docs = []
        for doc in self.documents.values():
            if date_from and doc["date"] < datetime.combine(date_from, datetime.min.time()):
                continue
            if date_to and doc["date"] > datetime.combine(date_to, datetime.min.time()):
                continue
            docs.append(doc)
        return copy.deepcopy(self._sorted(docs, sort))

    async def set_fields(self, event_id, update_data, unless_status=None):
        async with self._lock:
            doc = self.documents.get(event_id)
            if doc is None or (unless_status and doc.get("status") == unless_status):
                return None
            if "capacity" in update_data and len(doc["registrations"]) > update_data["capacity"]:
                return None
            doc.update(copy.deepcopy(update_data))
            return copy.deepcopy(doc)

    async def push_registration(self, event_id, registration):
        async with self._lock:
            doc = self.documents.get(event_id)
            if doc is None or len(doc["registrations"]) >= doc["capacity"]:
                return None
            # Yield mid-update so racing callers really interleave
            await asyncio.sleep(0)
            doc["registrations"].append(copy.deepcopy(registration))
            return copy.deepcopy(doc)

    async def delete(self, event_id, unless_status=None):
        doc = self.documents.get(event_id)
        if doc is None or (unless_status and doc.get("status") == unless_status):
            return False
        del self.documents[event_id]
        return True


class InMemoryAccountsRepository:
    """Members/admins store with exact-match lookups."""

    def __init__(self, accounts=None):
        self.documents = [copy.deepcopy(a) for a in (accounts or [])]

    async def find_one(self, query):
        for doc in self.documents:
            if all(doc.get(key) == value for key, value in query.items()):
                return copy.deepcopy(doc)
        return None

    async def insert_one(self, account):
        self.documents.append(copy.deepcopy(account))
        return account["_id"]
