from sportnest.db.session import get_db

class AdminsRepository:
    def __init__(self, db=None):
        self.collection = (db if db is not None else get_db())["admins"]

    async def find_one(self, query):
        return await self.collection.find_one(query)

    async def insert_one(self, admin):
        result = await self.collection.insert_one(admin)
        return result.inserted_id
