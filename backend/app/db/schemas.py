# backend/app/db/schemas.py
"""MongoDB document schemas using Pydantic"""

from __future__ import annotations
from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic_core import core_schema


class PyObjectId(str):
    """ObjectId accepted from the driver or as a hex string, always rendered as str."""

    @classmethod
    def __get_pydantic_core_schema__(cls, _source: Any, handler: GetCoreSchemaHandler):
        def validate(v: Any) -> str:
            if isinstance(v, ObjectId):
                return str(v)
            if isinstance(v, str) and ObjectId.is_valid(v):
                return v
            raise ValueError("Invalid ObjectId")
        return core_schema.no_info_plain_validator_function(
            validate,
            serialization=core_schema.to_string_ser_schema(),
        )

    @classmethod
    def __get_pydantic_json_schema__(cls, core_schema_, handler: GetJsonSchemaHandler):
        return {"type": "string", "examples": ["64f1a2b3c4d5e67890ab12cd"]}


class MongoDocument(BaseModel):
    """Base for documents read back from a collection"""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: PyObjectId = Field(alias="_id")


class UserDocument(BaseModel):
    """User as stored in the ``users`` collection"""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str
    email: str
    phone: str
    password: str  # bcrypt hash
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class StoredUser(MongoDocument, UserDocument):
    pass


class OrderDocument(BaseModel):
    """Order as inserted into the ``orders`` collection.

    Every field must be present; values are stored exactly as received.
    """
    name: Any
    qty: Any
    price: Any
    mode: Any
