"""Token service for JWT creation, decoding, and denylist checks."""

import logging
import time
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
import redis
from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework.exceptions import AuthenticationFailed

from core.redis_client import get_redis_client

logger = logging.getLogger(__name__)


class DenylistUnavailable(Exception):
    """Raised when the Redis denylist cannot be read or written (fail-closed)."""


class TokenDenylist:
    """Revoked bearer tokens, shared by every server instance through Redis.

    Entries are keyed by the token value and expire together with the token,
    so the denylist never outgrows the set of still-valid tokens.
    """

    PREFIX = "denylist:token:"

    def __init__(self, client):
        self._client = client

    def revoke(self, token: str, expires_at: int) -> None:
        """Mark ``token`` as revoked until its ``exp`` timestamp."""
        # SETEX rejects a zero TTL; an already-expired token is unusable anyway.
        ttl_seconds = max(1, expires_at - int(time.time()))
        try:
            self._client.setex(f"{self.PREFIX}{token}", ttl_seconds, "1")
        except redis.RedisError as exc:
            raise DenylistUnavailable("Redis unavailable while revoking token") from exc

    def is_revoked(self, token: str) -> bool:
        try:
            return self._client.get(f"{self.PREFIX}{token}") is not None
        except redis.RedisError as exc:
            raise DenylistUnavailable("Redis unavailable while checking denylist") from exc


class TokenService:
    """Handle JWT issuance, verification, and revocation."""

    ALGORITHM = "HS256"

    def __init__(self, denylist: TokenDenylist, secret: str | None = None, ttl: timedelta | None = None):
        self.denylist = denylist
        self.secret = secret or settings.SECRET_KEY
        self.ttl = ttl or timedelta(minutes=settings.JWT_TTL_MINUTES)

    def issue(self, user) -> str:
        """Return a signed token identifying ``user``."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user.pk),
            "jti": str(uuid.uuid4()),
            "iat": int(now.timestamp()),
            "exp": int((now + self.ttl).timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=self.ALGORITHM)

    def decode(self, token: str) -> dict[str, Any]:
        """Decode and validate a JWT signature and expiry."""
        try:
            return jwt.decode(token, self.secret, algorithms=[self.ALGORITHM])
        except jwt.ExpiredSignatureError as exc:
            raise AuthenticationFailed("Token has expired") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthenticationFailed("Invalid token") from exc

    def authenticate(self, token: str):
        """Return the user owning a valid, non-revoked token."""
        payload = self.decode(token)
        if self.denylist.is_revoked(token):
            raise AuthenticationFailed("Token has been revoked")

        user_model = get_user_model()
        try:
            return user_model.objects.get(pk=payload.get("sub"))
        except (user_model.DoesNotExist, DjangoValidationError, ValueError, TypeError) as exc:
            raise AuthenticationFailed("User not found") from exc

    def revoke(self, token: str) -> None:
        """Add a valid token to the denylist for the rest of its lifetime."""
        payload = self.decode(token)
        self.denylist.revoke(token, int(payload["exp"]))
        logger.info("Token %s revoked for user %s", payload.get("jti"), payload.get("sub"))


def get_token_service() -> TokenService:
    """Build the token service around the shared Redis denylist."""
    return TokenService(TokenDenylist(get_redis_client()))


__all__ = ["TokenService", "TokenDenylist", "DenylistUnavailable", "get_token_service"]
