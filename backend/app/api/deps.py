# backend/app/api/deps.py
"""API dependencies: database handles, repositories and the auth gate"""

from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.errors import MissingToken
from app.core.security import decode_access_token
from app.db.mongo import MongoConnection
from app.db.repositories import (
    HoldingRepository,
    OrderRepository,
    PositionRepository,
    UserRepository,
)
from app.schemas.auth import TokenClaims
from app.logger import get_logger

log = get_logger(__name__)

# auto_error=False so a missing/odd header reaches our own MissingToken
bearer_scheme = HTTPBearer(auto_error=False)


def get_mongo(request: Request) -> MongoConnection:
    """The connection handle created by the app lifespan"""
    mongo: Optional[MongoConnection] = getattr(request.app.state, "mongo", None)
    if mongo is None:
        # app used without its lifespan (e.g. mounted elsewhere)
        mongo = MongoConnection()
        request.app.state.mongo = mongo
    return mongo


async def get_db(mongo: MongoConnection = Depends(get_mongo)) -> AsyncIOMotorDatabase:
    return await mongo.get_db()


def get_user_repo(db: AsyncIOMotorDatabase = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_holding_repo(db: AsyncIOMotorDatabase = Depends(get_db)) -> HoldingRepository:
    return HoldingRepository(db)


def get_position_repo(db: AsyncIOMotorDatabase = Depends(get_db)) -> PositionRepository:
    return PositionRepository(db)


def get_order_repo(db: AsyncIOMotorDatabase = Depends(get_db)) -> OrderRepository:
    return OrderRepository(db)


def extract_bearer_token(credentials: Optional[HTTPAuthorizationCredentials]) -> str:
    """Token part of ``Authorization: Bearer <token>``, or MissingToken"""
    if credentials is None or not credentials.credentials.strip():
        raise MissingToken("no bearer token in Authorization header")
    return credentials.credentials.strip()


async def get_current_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenClaims:
    """Auth gate for protected routes.

    Runs before the route's repository dependencies are resolved, so a
    rejected request never touches the database.
    """
    token = extract_bearer_token(credentials)
    payload = decode_access_token(token)
    return TokenClaims(userId=str(payload["userId"]), email=str(payload["email"]))
