# backend/app/core/errors.py
"""Error taxonomy and its mapping to HTTP responses.

Every failure a client can observe is one of the ``AppError`` subclasses
below. Each carries a fixed status code and a fixed public message; the
underlying cause is logged and never sent to the client.
"""

from __future__ import annotations

from contextlib import contextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import ConnectionFailure

from app.logger import get_logger

log = get_logger(__name__)


class AppError(Exception):
    """Base class for errors that map to a client response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Server error"
    headers: dict[str, str] | None = None

    def __init__(self, detail: str | None = None):
        # detail is for the log only
        self.detail = detail
        super().__init__(detail or self.message)


class DuplicateEmail(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Email already registered"


class InvalidCredentials(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid email or password"


class InvalidRequest(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request body"


class MissingToken(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "No token, authorization denied"
    headers = {"WWW-Authenticate": "Bearer"}


class InvalidToken(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Token is not valid"
    headers = {"WWW-Authenticate": "Bearer"}


class DatabaseUnavailable(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Database connection failed"


class UnhandledServerError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Server error"


def error_body(exc: AppError) -> dict:
    return {"success": False, "message": exc.message}


def register_error_handlers(app: FastAPI) -> None:
    """Install the handlers that turn errors into ``{success, message}`` bodies."""

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            log.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.detail)
        else:
            log.warning("%s on %s %s", type(exc).__name__, request.method, request.url.path)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc),
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        fields = [".".join(str(p) for p in err.get("loc", ())) for err in exc.errors()]
        log.warning("Rejected body on %s %s: %s", request.method, request.url.path, fields)
        err = InvalidRequest()
        return JSONResponse(status_code=err.status_code, content=error_body(err))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        log.exception("Unexpected error on %s %s: %s", request.method, request.url.path, type(exc).__name__)
        err = UnhandledServerError()
        return JSONResponse(status_code=err.status_code, content=error_body(err))


@contextmanager
def handler_boundary(action: str):
    """Convert store and unexpected failures inside a handler into AppErrors.

    AppErrors pass through unchanged. Connection-class driver errors become
    DatabaseUnavailable; anything else becomes UnhandledServerError. The
    original exception is logged with its traceback.
    """
    try:
        yield
    except AppError:
        raise
    except ConnectionFailure as e:
        log.error("%s: database unavailable: %s", action, e)
        raise DatabaseUnavailable(str(e)) from e
    except Exception as e:
        log.exception("%s failed: %s", action, e)
        raise UnhandledServerError(str(e)) from e
