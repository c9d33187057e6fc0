"""
Signing and verification of access and refresh tokens.

Both tokens carry ``{"id": <user id>}`` plus an expiry. Access tokens are
never stored server side. A refresh token is only honoured while it is
also the value stored on the user row (see ``users.service``).
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt

from budget_tracker.config import Settings


class TokenError(Exception):
    """Base class for token verification failures."""


class InvalidSignature(TokenError):
    pass


class Expired(TokenError):
    pass


class TokenService:
    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        algorithm: str = "HS256",
        access_ttl: timedelta = timedelta(minutes=15),
        refresh_ttl: timedelta = timedelta(days=1),
    ):
        self.access_secret = access_secret
        self.refresh_secret = refresh_secret
        self.algorithm = algorithm
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            access_secret=settings.ACCESS_TOKEN_SECRET,
            refresh_secret=settings.REFRESH_TOKEN_SECRET,
            algorithm=settings.ALGORITHM,
            access_ttl=timedelta(seconds=settings.ACCESS_TOKEN_EXPIRE_SECONDS),
            refresh_ttl=timedelta(seconds=settings.REFRESH_TOKEN_EXPIRE_SECONDS),
        )

    def _sign(self, user_id: int, secret: str, ttl: timedelta) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "id": user_id,
            "iat": now,
            "exp": now + ttl,
            # two tokens minted within the same second must still differ
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(payload, secret, algorithm=self.algorithm)

    def issue_access_token(self, user_id: int) -> str:
        return self._sign(user_id, self.access_secret, self.access_ttl)

    def issue_refresh_token(self, user_id: int) -> str:
        return self._sign(user_id, self.refresh_secret, self.refresh_ttl)

    def verify(self, token: str, secret: str) -> Dict[str, Any]:
        try:
            return jwt.decode(token, secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as exc:
            raise Expired("Token has expired") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidSignature("Token could not be verified") from exc

    def verify_access_token(self, token: str) -> Dict[str, Any]:
        return self.verify(token, self.access_secret)

    def verify_refresh_token(self, token: str) -> Dict[str, Any]:
        return self.verify(token, self.refresh_secret)
