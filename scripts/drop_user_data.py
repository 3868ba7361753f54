"""Drop all data for a specific user."""
import asyncio
import sys

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient

# Collection name -> fields that reference the user
USER_FIELDS = {
    "sessions": ["user"],
    "posts": ["author"],
    "items": ["creator"],
    "goals": ["executor"],
    "profiles": ["user"],
    "preferences": ["user"],
    "messages": ["sender", "recipient"],
    "friends": ["user1", "user2"],
    "friend_requests": ["from_user", "to_user"],
}


async def drop_user_data(mongodb_url: str, db_name: str, user_id: str):
    """Delete all documents for a user, then the user itself."""
    client = AsyncIOMotorClient(mongodb_url)
    db = client[db_name]

    for collection_name, fields in USER_FIELDS.items():
        query = {"$or": [{field: user_id} for field in fields]}
        result = await db[collection_name].delete_many(query)
        print(f"Deleted {result.deleted_count} documents from {collection_name}")

    result = await db["users"].delete_one({"_id": ObjectId(user_id)})
    print(f"Deleted {result.deleted_count} user")

    client.close()
    print("Done!")


if __name__ == "__main__":
    if len(sys.argv) != 4:
        print("Usage: python drop_user_data.py <mongodb_url> <db_name> <user_id>")
        sys.exit(1)

    asyncio.run(drop_user_data(sys.argv[1], sys.argv[2], sys.argv[3]))
