from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from ..core.constants import DEFAULT_TOKEN_HOURS
from ..core.exceptions import TokenInvalidError
from ..users.model import User

TOKEN_INVALID_MESSAGE = "Token tidak valid atau sudah expired"


class TokenService:
    """Issues and verifies stateless HS256 bearer tokens.

    A token only proves who the bearer was at issue time; whether that user may
    still act is decided per request against the user store.
    """

    algorithm = "HS256"

    def __init__(self, secret: str, *, expires_hours: int = DEFAULT_TOKEN_HOURS):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._ttl = timedelta(hours=int(expires_hours))

    def issue(self, user: User, *, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(tz=timezone.utc)
        payload = {
            "user_id": user.id,
            "username": user.username,
            "role": user.role.value,
            "iat": now,
            "exp": now + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def decode(self, token: str) -> dict:
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "user_id"]},
            )
        except jwt.InvalidTokenError:
            raise TokenInvalidError(TOKEN_INVALID_MESSAGE)

        if not isinstance(claims.get("user_id"), int):
            raise TokenInvalidError(TOKEN_INVALID_MESSAGE)
        return claims
