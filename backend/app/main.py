# backend/app/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from app.api.deps import get_mongo
from app.core.config import settings
from app.core.errors import register_error_handlers
from app.db.mongo import MongoConnection
from app.logger import get_logger
from app.middleware.request_logger import RequestLoggerMiddleware
from app.routers import auth, portfolio

log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Own the MongoDB handle for the life of the process"""
    # ========== STARTUP ==========
    log.info("Starting %s (%s)...", settings.APP_NAME, settings.ENV)
    if settings.JWT_SECRET_GENERATED:
        log.warning("JWT_SECRET is not set; using a per-process secret, tokens will not survive a restart")

    # Connects lazily on the first request that needs the database
    app.state.mongo = MongoConnection()

    yield  # Application runs here

    # ========== SHUTDOWN ==========
    app.state.mongo.close()
    log.info("Application shutdown complete!")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )

    # Request logging wraps everything; CORS sits inside it
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_middleware(RequestLoggerMiddleware)

    register_error_handlers(app)

    app.include_router(auth.router)
    app.include_router(portfolio.router)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        """Liveness string, no database I/O"""
        return "INVESTA Backend is running!"

    @app.get("/health")
    async def health_check(mongo: MongoConnection = Depends(get_mongo)):
        """Database reachability as {status: healthy|degraded, database: healthy|unhealthy}; always 200"""
        db_ok = await mongo.ping()
        return {
            "status": "healthy" if db_ok else "degraded",
            "database": "healthy" if db_ok else "unhealthy",
        }

    return app


app = create_app()
