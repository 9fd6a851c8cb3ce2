from __future__ import annotations

from typing import Optional

from .scores import CamelModel


class UserRecord(CamelModel):
    """Stored at ``memory:user:<lower-cased email>``."""

    user_id: str
    email: str
    password_hash: str
    created_at: str  # ISO 8601


class Credentials(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class PublicUser(CamelModel):
    email: str
    user_id: Optional[str] = None


class AuthResponse(CamelModel):
    token: str
    user: PublicUser


class VerifyRequest(CamelModel):
    token: Optional[str] = None


class VerifyResponse(CamelModel):
    valid: bool
    user: Optional[PublicUser] = None
    error: Optional[str] = None
