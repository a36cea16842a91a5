import logging
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING
from sportnest.core.config import MONGO_URI, MONGO_DB_NAME

logger = logging.getLogger(__name__)

client = AsyncIOMotorClient(MONGO_URI)  # Initialize the MongoDB client globally
db = client[MONGO_DB_NAME]  # Get the database instance

REQUIRED_COLLECTIONS = ["events", "members", "admins"]

async def ensure_collections_exist():
    """Ensure all required collections and their indexes exist in the database."""
    existing_collections = await db.list_collection_names()

    for collection in REQUIRED_COLLECTIONS:
        if collection not in existing_collections:
            await db.create_collection(collection)
            logger.info(f"Created collection: {collection}")

    await db["events"].create_index([("status", ASCENDING), ("date", ASCENDING)])
    await db["events"].create_index([("submitted_by", ASCENDING)])
    await db["members"].create_index("email", unique=True)
    await db["admins"].create_index("email", unique=True)

def get_db():
    return db
