import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple
from pymongo import ReturnDocument
from sportnest.db.session import get_db

SortSpec = List[Tuple[str, int]]


def build_search_filter(search: Optional[str]) -> Dict[str, Any]:
    """Case-insensitive match over event name or venue."""
    if not search or not search.strip():
        return {}
    pattern = re.escape(search.strip())
    return {"$or": [
        {"name": {"$regex": pattern, "$options": "i"}},
        {"venue": {"$regex": pattern, "$options": "i"}},
    ]}


def build_listing_query(
    status: Optional[str] = None,
    search: Optional[str] = None,
    submitted_by: Optional[str] = None,
) -> Dict[str, Any]:
    clauses = []
    if status:
        clauses.append({"status": status})
    if submitted_by:
        clauses.append({"submitted_by": submitted_by})
    search_filter = build_search_filter(search)
    if search_filter:
        clauses.append(search_filter)

    if not clauses:
        return {}
    if len(clauses) == 1:
        return clauses[0]
    return {"$and": clauses}


def build_date_range_query(date_from: Optional[date] = None, date_to: Optional[date] = None) -> Dict[str, Any]:
    """Inclusive range over the stored event date."""
    query: Dict[str, Any] = {}
    if date_from or date_to:
        query["date"] = {}
        if date_from:
            query["date"]["$gte"] = datetime.combine(date_from, datetime.min.time())
        if date_to:
            query["date"]["$lte"] = datetime.combine(date_to, datetime.min.time())
    return query


# Matches only while there is still a free slot, so the size check and the
# $push happen in one document update.
HAS_FREE_SLOT = {"$expr": {"$lt": [{"$size": {"$ifNull": ["$registrations", []]}}, "$capacity"]}}


def capacity_covers_registrations(capacity: int) -> Dict[str, Any]:
    return {"$expr": {"$lte": [{"$size": {"$ifNull": ["$registrations", []]}}, capacity]}}


def excluding_status(status: Optional[str]) -> Dict[str, Any]:
    return {"status": {"$ne": status}} if status else {}


class EventsRepository:
    def __init__(self, db=None):
        self.collection = (db if db is not None else get_db())["events"]

    async def insert(self, event: Dict[str, Any]) -> str:
        result = await self.collection.insert_one(event)
        return result.inserted_id

    async def get(self, event_id: str) -> Optional[Dict[str, Any]]:
        return await self.collection.find_one({"_id": event_id})

    async def exists(self, event_id: str) -> bool:
        return await self.collection.count_documents({"_id": event_id}, limit=1) > 0

    async def list_events(
        self,
        status: Optional[str] = None,
        search: Optional[str] = None,
        submitted_by: Optional[str] = None,
        sort: Optional[SortSpec] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> List[Dict[str, Any]]:
        cursor = self.collection.find(build_listing_query(status, search, submitted_by))

        if sort:
            cursor = cursor.sort(sort)

        cursor = cursor.skip(skip).limit(limit)
        return [doc async for doc in cursor]

    async def count_events(
        self,
        status: Optional[str] = None,
        search: Optional[str] = None,
        submitted_by: Optional[str] = None,
    ) -> int:
        return await self.collection.count_documents(build_listing_query(status, search, submitted_by))

    async def list_in_date_range(
        self,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        sort: Optional[SortSpec] = None,
    ) -> List[Dict[str, Any]]:
        cursor = self.collection.find(build_date_range_query(date_from, date_to))
        if sort:
            cursor = cursor.sort(sort)
        return [doc async for doc in cursor]

    async def set_fields(
        self,
        event_id: str,
        update_data: Dict[str, Any],
        unless_status: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """Apply a $set and return the updated document.

        A new capacity is only written while it still covers the current
        registrations, and nothing is written while the event is in
        `unless_status`. Returns None when the event is missing or a guard fails.
        """
        query: Dict[str, Any] = {"_id": event_id, **excluding_status(unless_status)}
        if "capacity" in update_data:
            query.update(capacity_covers_registrations(update_data["capacity"]))
        return await self.collection.find_one_and_update(
            query,
            {"$set": update_data},
            return_document=ReturnDocument.AFTER,
        )

    async def push_registration(self, event_id: str, registration: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Append a registration if a slot is free.

        Returns the updated document, or None when the event is missing or full.
        """
        return await self.collection.find_one_and_update(
            {"_id": event_id, **HAS_FREE_SLOT},
            {"$push": {"registrations": registration}},
            return_document=ReturnDocument.AFTER,
        )

    async def delete(self, event_id: str, unless_status: Optional[str] = None) -> bool:
        result = await self.collection.delete_one({"_id": event_id, **excluding_status(unless_status)})
        return result.deleted_count > 0
