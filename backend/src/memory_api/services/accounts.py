from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

import jwt

from ..core.config import Settings
from ..core.kv import KeyValueStore
from ..core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from ..models.users import UserRecord
from ..utils.validators import MIN_PASSWORD_LENGTH, is_valid_email, is_valid_password
from .errors import AccountExistsError, AuthError, InputValidationError

logger = logging.getLogger(__name__)

USER_PREFIX = "memory:user"


def user_key(email: str) -> str:
    return f"{USER_PREFIX}:{email.lower()}"


def _check_credentials(email: Optional[str], password: Optional[str]) -> None:
    if not email or not password:
        raise InputValidationError("Email and password are required")
    if not is_valid_email(email):
        raise InputValidationError("Invalid email format")


class AccountService:
    """Registration, login and bearer-token resolution."""

    def __init__(self, kv: KeyValueStore, settings: Settings) -> None:
        self.kv = kv
        self.settings = settings

    async def get_user(self, email: str) -> Optional[UserRecord]:
        raw = await self.kv.get(user_key(email))
        return None if not raw else UserRecord.model_validate(raw)

    async def register(self, email: Optional[str], password: Optional[str]):
        _check_credentials(email, password)
        if not is_valid_password(password):
            raise InputValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )

        email = email.lower()
        if await self.get_user(email) is not None:
            raise AccountExistsError("User already exists")

        user = UserRecord(
            user_id=str(uuid.uuid4()),
            email=email,
            password_hash=hash_password(password),
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        await self.kv.set(user_key(email), user.model_dump(by_alias=True))
        logger.info("Registered user %s", user.user_id)
        return create_access_token(user.email, self.settings), user

    async def authenticate(self, email: Optional[str], password: Optional[str]):
        _check_credentials(email, password)
        user = await self.get_user(email)
        if user is None or not verify_password(user.password_hash, password):
            raise AuthError("Invalid email or password")
        return create_access_token(user.email, self.settings), user

    def verify(self, token: str) -> str:
        """Return the email a token was issued for."""
        try:
            claims = decode_access_token(token, self.settings)
        except jwt.PyJWTError as exc:
            raise AuthError("Invalid or expired token") from exc
        return claims["sub"]

    async def resolve_user(self, authorization: Optional[str]) -> Optional[UserRecord]:
        if not authorization:
            return None
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            return None
        try:
            email = self.verify(token.strip())
        except AuthError:
            return None
        return await self.get_user(email)
