# backend/app/schemas/auth.py
"""Authentication related schemas"""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.networks import validate_email


def _check_email_syntax(value: str) -> str:
    # EmailStr would hand back a normalized address; keep what was sent so
    # login looks up the same string signup stored
    validate_email(value)
    return value


RawEmail = Annotated[str, AfterValidator(_check_email_syntax)]


class SignupRequest(BaseModel):
    """Signup body; phone may arrive as a JSON number"""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str = Field(..., min_length=1)
    email: RawEmail
    phone: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class SignupResponse(BaseModel):
    success: bool = True
    message: str = "Account created successfully!"


class LoginRequest(BaseModel):
    """Login body. No length or syntax checks: an empty or malformed value
    fails the lookup or the hash check like any other bad credential."""
    email: str
    password: str


class PublicUser(BaseModel):
    """User fields safe to return to the client"""
    id: str
    name: str
    email: str
    phone: str


class LoginResponse(BaseModel):
    success: bool = True
    message: str = "Login successful"
    token: str
    user: PublicUser


class TokenClaims(BaseModel):
    """Claims the auth gate hands to protected handlers"""
    userId: str
    email: str
