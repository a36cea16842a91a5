"""Create the collections, an admin account and a few approved sample events.

Usage:
    python scripts/seed_events.py --admin-email admin@sportnest.lk --admin-password secret
"""
import argparse
import asyncio
import logging
from datetime import datetime, timedelta, timezone
from uuid import uuid4
from sportnest.core.logging_config import setup_logging
from sportnest.core.security import hash_password
from sportnest.db.session import ensure_collections_exist, get_db

logger = logging.getLogger("seed_events")

SAMPLE_EVENTS = [
    ("Basketball Championship", "Annual basketball championship tournament with prizes for winners",
     "Main Sports Complex", 50, 7, "09:00", "17:00", 500),
    ("Football Training Session", "Professional football training with certified coaches",
     "Football Ground A", 30, 10, "14:00", "16:00", 300),
    ("Tennis Workshop", "Learn tennis fundamentals from professional instructors",
     "Tennis Courts", 20, 14, "10:00", "12:00", 750),
    ("Swimming Competition", "Inter-club swimming competition with medals",
     "Olympic Pool", 40, 21, "08:00", "14:00", 400),
    ("Badminton Tournament", "Singles and doubles badminton tournament",
     "Badminton Hall", 32, 35, "09:00", "18:00", 600),
]

async def seed(admin_email: str, admin_password: str):
    db = get_db()
    await ensure_collections_exist()

    admin_email = admin_email.lower()
    admin = await db["admins"].find_one({"email": admin_email})
    if not admin:
        admin = {
            "_id": str(uuid4()),
            "email": admin_email,
            "hashed_password": hash_password(admin_password),
            "role": "admin",
            "created_at": datetime.now(timezone.utc),
        }
        await db["admins"].insert_one(admin)
        logger.info(f"Created admin {admin_email}")

    today = datetime.combine(datetime.now().date(), datetime.min.time())
    created = 0
    for name, description, venue, capacity, days_ahead, start, end, fee in SAMPLE_EVENTS:
        if await db["events"].find_one({"name": name}):
            continue
        now = datetime.now(timezone.utc)
        await db["events"].insert_one({
            "_id": str(uuid4()),
            "name": name,
            "description": description,
            "venue": venue,
            "venue_facilities": [],
            "requested_items": [],
            "capacity": capacity,
            "registration_fee": float(fee),
            "date": today + timedelta(days=days_ahead),
            "start_time": start,
            "end_time": end,
            "status": "approved",
            "registrations": [],
            "submitted_by": None,
            "moderated_by": admin["_id"],
            "created_at": now,
            "updated_at": now,
        })
        created += 1
    logger.info(f"Seeded {created} sample events")

def main():
    parser = argparse.ArgumentParser(description="Seed the SportNest database")
    parser.add_argument("--admin-email", required=True)
    parser.add_argument("--admin-password", required=True)
    args = parser.parse_args()

    setup_logging()
    asyncio.run(seed(args.admin_email, args.admin_password))

if __name__ == "__main__":
    main()
