# backend/app/schemas/__init__.py
"""Request/response schemas for the HTTP surface"""

from .auth import (
    SignupRequest,
    SignupResponse,
    LoginRequest,
    LoginResponse,
    PublicUser,
    TokenClaims,
)
from .orders import OrderCreate

__all__ = [
    "SignupRequest",
    "SignupResponse",
    "LoginRequest",
    "LoginResponse",
    "PublicUser",
    "TokenClaims",
    "OrderCreate",
]
