# backend/app/db/mongo.py
"""MongoDB connection handle owned by the application lifespan"""

from __future__ import annotations
import asyncio
from typing import Optional

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pymongo.errors import PyMongoError

from app.core.config import settings
from app.core.errors import DatabaseUnavailable
from app.logger import get_logger

log = get_logger(__name__)

USERS = "users"
HOLDINGS = "holdings"
POSITIONS = "positions"
ORDERS = "orders"


class MongoConnection:
    """Lazily connected Motor client.

    The client object is cheap to build and does no I/O; the first call to
    :meth:`get_db` pings the server and creates indexes, once. Later calls
    reuse the same database handle until :meth:`close`.
    """

    def __init__(self, uri: Optional[str] = None, db_name: Optional[str] = None,
                 timeout_ms: Optional[int] = None):
        self.uri = uri or settings.MONGO_URI
        self.db_name = db_name or settings.MONGO_DB_NAME
        self.timeout_ms = timeout_ms or settings.MONGO_TIMEOUT_MS
        self._client: Optional[AsyncIOMotorClient] = None
        self._db: Optional[AsyncIOMotorDatabase] = None
        self._ready = False
        self._lock: Optional[asyncio.Lock] = None

    @property
    def is_connected(self) -> bool:
        return self._ready

    def _build_client(self) -> AsyncIOMotorClient:
        return AsyncIOMotorClient(
            self.uri,
            serverSelectionTimeoutMS=self.timeout_ms,
            maxPoolSize=10,
            maxIdleTimeMS=60000,
        )

    async def get_db(self) -> AsyncIOMotorDatabase:
        """Return the database, connecting on first use"""
        if self._ready:
            return self._db
        if self._lock is None:
            self._lock = asyncio.Lock()
        async with self._lock:
            if self._ready:
                return self._db
            try:
                if self._client is None:
                    self._client = self._build_client()
                db = self._client[self.db_name]
                await db.command("ping")
                await ensure_indexes(db)
            except PyMongoError as e:
                log.error("MongoDB connection failed: %s", e)
                raise DatabaseUnavailable(str(e)) from e
            self._db = db
            self._ready = True
            log.info("MongoDB connected: %s", self.db_name)
            return self._db

    async def ping(self) -> bool:
        """True if the server answers; never raises"""
        try:
            if not self._ready:
                # connecting pings already
                await self.get_db()
                return True
            await self._db.command("ping")
            return True
        except (DatabaseUnavailable, PyMongoError) as e:
            log.warning("MongoDB ping failed: %s", e)
            return False

    async def collection(self, name: str) -> AsyncIOMotorCollection:
        return (await self.get_db())[name]

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            log.info("Disconnected from MongoDB")
        self._client = None
        self._db = None
        self._ready = False


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create required indexes (idempotent)"""
    await db[USERS].create_index("email", unique=True)
