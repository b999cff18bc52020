"""DRF authentication backed by ``JWTAuthMiddleware``.

Bearer tokens are decoded and checked against the denylist once, in the
middleware. DRF views only need to see the result, so this authenticator reads
the user and the raw token that the middleware stored on the Django request.
"""

from typing import Any, Optional, Tuple

from rest_framework.authentication import BaseAuthentication

BEARER_CHALLENGE = 'Bearer realm="api"'


class MiddlewareUserAuthentication(BaseAuthentication):
    """Return ``(user, token)`` for requests the middleware authenticated."""

    def authenticate(self, request) -> Optional[Tuple[Any, Optional[str]]]:
        django_request = getattr(request, "_request", None)
        user = getattr(django_request, "user", None)
        if user is None or not user.is_authenticated:
            return None
        return user, getattr(django_request, "auth_token", None)

    def authenticate_header(self, request) -> str:
        # A non-empty challenge makes DRF answer missing credentials with 401, not 403.
        return BEARER_CHALLENGE


__all__ = ["BEARER_CHALLENGE", "MiddlewareUserAuthentication"]
