from sportnest.db.session import get_db

class MembersRepository:
    def __init__(self, db=None):
        self.collection = (db if db is not None else get_db())["members"]

    async def find_one(self, query):
        return await self.collection.find_one(query)

    async def insert_one(self, member):
        result = await self.collection.insert_one(member)
        return result.inserted_id
