"""Middleware to authenticate requests via JWT and the Redis denylist."""

import logging

from django.contrib.auth.models import AnonymousUser
from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin
from rest_framework.exceptions import AuthenticationFailed

from authentication.services import DenylistUnavailable, get_token_service
from .authentication import BEARER_CHALLENGE
from .exceptions import GENERIC_AUTH_MESSAGE, InternalError, Unauthorized

logger = logging.getLogger(__name__)


def get_bearer_token(request) -> str | None:
    """Extract the Bearer token from the Authorization header if present."""
    auth_header = request.META.get("HTTP_AUTHORIZATION", "")
    if auth_header.startswith("Bearer "):
        return auth_header.split(" ", 1)[1].strip() or None
    return None


class JWTAuthMiddleware(MiddlewareMixin):
    """Decode the bearer JWT, check the denylist, and attach request.user."""

    def process_request(self, request):  # type: ignore[override]
        """Authenticate request using a Bearer token if present."""
        token = get_bearer_token(request)
        if token is None:
            request.user = AnonymousUser()
            return None

        try:
            request.user = get_token_service().authenticate(token)
            request.auth_token = token
            return None
        except AuthenticationFailed as exc:
            logger.info("Rejected bearer token on %s: %s", request.path, exc.detail)
            return _unauthorized()
        except DenylistUnavailable:
            # Fail closed: a token that cannot be checked is never accepted.
            logger.exception("Denylist unavailable while authenticating %s", request.path)
            return _internal_error()


def _unauthorized() -> JsonResponse:
    error = Unauthorized(GENERIC_AUTH_MESSAGE)
    response = JsonResponse(error.envelope(), status=error.status_code)
    response["WWW-Authenticate"] = BEARER_CHALLENGE
    return response


def _internal_error() -> JsonResponse:
    error = InternalError()
    return JsonResponse(error.envelope(), status=error.status_code)


__all__ = ["JWTAuthMiddleware", "get_bearer_token"]
