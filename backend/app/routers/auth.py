# backend/app/routers/auth.py
"""Signup and login endpoints"""

from fastapi import APIRouter, Depends, status

from app.api.deps import get_user_repo
from app.core.errors import handler_boundary
from app.db.repositories import UserRepository
from app.schemas.auth import LoginRequest, LoginResponse, SignupRequest, SignupResponse
from app.services import accounts

router = APIRouter(tags=["Authentication"])


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(payload: SignupRequest, users: UserRepository = Depends(get_user_repo)):
    """Register a new user. No token is issued; the client logs in next."""
    with handler_boundary("signup"):
        await accounts.signup(payload, users)
    return SignupResponse()


@router.post("/login", response_model=LoginResponse)
async def login(payload: LoginRequest, users: UserRepository = Depends(get_user_repo)):
    """Check credentials and return a 7-day bearer token"""
    with handler_boundary("login"):
        return await accounts.login(payload, users)
