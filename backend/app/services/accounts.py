# backend/app/services/accounts.py
"""Signup and login against the users collection"""

from pymongo.errors import DuplicateKeyError
from starlette.concurrency import run_in_threadpool

from app.core.errors import DuplicateEmail, InvalidCredentials
from app.core.security import create_access_token, get_password_hash, verify_password
from app.db.repositories import UserRepository
from app.db.schemas import UserDocument
from app.schemas.auth import LoginRequest, LoginResponse, PublicUser, SignupRequest
from app.logger import get_logger

log = get_logger(__name__)


async def signup(payload: SignupRequest, users: UserRepository) -> str:
    """Create a user and return its id.

    The existence check and the insert are separate operations; the unique
    index on ``email`` catches a concurrent signup that slips between them.
    """
    if await users.exists(payload.email):
        raise DuplicateEmail(payload.email)

    # bcrypt is CPU bound, keep it off the event loop
    hashed = await run_in_threadpool(get_password_hash, payload.password)
    user = UserDocument(
        name=payload.name,
        email=payload.email,
        phone=payload.phone,
        password=hashed,
    )
    try:
        user_id = await users.create_user(user)
    except DuplicateKeyError as e:
        raise DuplicateEmail(payload.email) from e

    log.info("New user registered: %s", payload.email)
    return user_id


async def login(payload: LoginRequest, users: UserRepository) -> LoginResponse:
    """Verify credentials and issue a token.

    Unknown email and wrong password raise the same error.
    """
    user = await users.find_by_email(payload.email)
    if user is None:
        log.info("Login failed, unknown email: %s", payload.email)
        raise InvalidCredentials()

    if not await run_in_threadpool(verify_password, payload.password, user.password):
        log.info("Login failed, bad password: %s", payload.email)
        raise InvalidCredentials()

    token = create_access_token(user_id=user.id, email=user.email)
    log.info("User logged in: %s", user.email)
    return LoginResponse(
        token=token,
        user=PublicUser(id=user.id, name=user.name, email=user.email, phone=user.phone),
    )
