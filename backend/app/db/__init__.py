# backend/app/db/__init__.py
"""Database package - MongoDB only"""

from .mongo import (
    MongoConnection,
    ensure_indexes,
    USERS,
    HOLDINGS,
    POSITIONS,
    ORDERS,
)

from .schemas import (
    PyObjectId,
    MongoDocument,
    UserDocument,
    StoredUser,
    OrderDocument,
)

from .repositories import (
    BaseRepository,
    UserRepository,
    HoldingRepository,
    PositionRepository,
    OrderRepository,
)

__all__ = [
    # Connection management
    "MongoConnection",
    "ensure_indexes",
    "USERS",
    "HOLDINGS",
    "POSITIONS",
    "ORDERS",

    # Schemas
    "PyObjectId",
    "MongoDocument",
    "UserDocument",
    "StoredUser",
    "OrderDocument",

    # Repositories
    "BaseRepository",
    "UserRepository",
    "HoldingRepository",
    "PositionRepository",
    "OrderRepository",
]
