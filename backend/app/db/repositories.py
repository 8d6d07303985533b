# backend/app/db/repositories.py
"""Repository pattern for MongoDB operations"""

from __future__ import annotations
from typing import Any, Dict, List, Optional

from bson import ObjectId
from fastapi.encoders import jsonable_encoder
from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase

from app.db.mongo import HOLDINGS, ORDERS, POSITIONS, USERS
from app.db.schemas import OrderDocument, StoredUser, UserDocument


def _stringify_id(doc: Dict[str, Any]) -> Dict[str, Any]:
    if "_id" in doc:
        doc["_id"] = str(doc["_id"])
    return doc


class BaseRepository:
    """Common operations over one collection"""

    collection_name: str = ""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection: AsyncIOMotorCollection = db[self.collection_name]

    async def create(self, document: dict) -> str:
        """Insert a document and return its id as a string"""
        result = await self.collection.insert_one(document)
        return str(result.inserted_id)

    async def find_one(self, filter: dict) -> Optional[dict]:
        doc = await self.collection.find_one(filter)
        return _stringify_id(doc) if doc else None

    async def find_all(self) -> List[dict]:
        """Every document in the collection, unfiltered and unpaginated.

        Documents come back as written, made JSON-safe: ObjectIds anywhere in
        them (not just ``_id``) become strings.
        """
        docs = await self.collection.find({}).to_list(length=None)
        return jsonable_encoder(docs, custom_encoder={ObjectId: str})


class UserRepository(BaseRepository):
    collection_name = USERS

    async def find_by_email(self, email: str) -> Optional[StoredUser]:
        doc = await self.find_one({"email": email})
        return StoredUser.model_validate(doc) if doc else None

    async def exists(self, email: str) -> bool:
        return await self.collection.find_one({"email": email}, projection={"_id": 1}) is not None

    async def create_user(self, user: UserDocument) -> str:
        return await self.create(user.model_dump())


class HoldingRepository(BaseRepository):
    collection_name = HOLDINGS

    async def list_all(self) -> List[dict]:
        return await self.find_all()


class PositionRepository(BaseRepository):
    collection_name = POSITIONS

    async def list_all(self) -> List[dict]:
        return await self.find_all()


class OrderRepository(BaseRepository):
    collection_name = ORDERS

    async def create_order(self, order: OrderDocument) -> str:
        return await self.create(order.model_dump())
