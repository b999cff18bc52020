"""Domain error taxonomy and the single translator into the API error envelope."""

import logging
from enum import Enum
from typing import Any

from django.conf import settings
from django.db import IntegrityError
from django.http import Http404, JsonResponse
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response

from .authentication import BEARER_CHALLENGE

logger = logging.getLogger(__name__)

GENERIC_AUTH_MESSAGE = "Authentication credentials were not provided or are invalid, or the token was revoked."


class ErrorKind(str, Enum):
    """Failure categories surfaced to API clients."""

    INVALID_PARAMETER = "InvalidParameter"
    UNAUTHORIZED = "Unauthorized"
    FORBIDDEN = "Forbidden"
    NOT_FOUND = "NotFound"
    CONFLICT = "Conflict"
    INTERNAL_ERROR = "InternalError"


class DomainError(drf_exceptions.APIException):
    """Typed failure carrying an HTTP status, a client message and context data.

    ``data`` is included in the response body, so it must only hold values that
    are safe to show to the caller (ids, field names, offending values).
    """

    kind = ErrorKind.INTERNAL_ERROR
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"

    def __init__(self, message: str | None = None, data: Any = None, status_code: int | None = None):
        super().__init__(detail=message or self.default_detail)
        self.message = str(self.detail)
        self.data = data
        if status_code is not None:
            self.status_code = status_code

    def envelope(self) -> dict[str, Any]:
        return {"message": self.message, "status": self.status_code, "data": self.data}


class InvalidParameter(DomainError):
    kind = ErrorKind.INVALID_PARAMETER
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid parameters"


class Unauthorized(DomainError):
    kind = ErrorKind.UNAUTHORIZED
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Unauthorized"


class Forbidden(DomainError):
    kind = ErrorKind.FORBIDDEN
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You do not have permission to modify this resource."


class NotFound(DomainError):
    kind = ErrorKind.NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class Conflict(DomainError):
    kind = ErrorKind.CONFLICT
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Request conflicts with existing data"


class InternalError(DomainError):
    kind = ErrorKind.INTERNAL_ERROR
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"


def _auth_message(exc: drf_exceptions.APIException) -> str:
    # Specific reasons ("Token has expired", ...) only when explicitly enabled.
    if getattr(settings, "DEBUG_AUTH_ERRORS", False):
        return str(exc.detail)
    return GENERIC_AUTH_MESSAGE


def to_domain_error(exc: Exception) -> DomainError:
    """Map any exception raised while handling a request onto the taxonomy."""

    if isinstance(exc, DomainError):
        return exc
    if isinstance(exc, drf_exceptions.ValidationError):
        return InvalidParameter("Invalid parameters", data=exc.detail)
    if isinstance(exc, (drf_exceptions.ParseError, drf_exceptions.UnsupportedMediaType)):
        return InvalidParameter(str(exc.detail))
    if isinstance(exc, (drf_exceptions.AuthenticationFailed, drf_exceptions.NotAuthenticated)):
        return Unauthorized(_auth_message(exc))
    if isinstance(exc, drf_exceptions.PermissionDenied):
        return Forbidden()
    if isinstance(exc, (Http404, drf_exceptions.NotFound)):
        return NotFound()
    if isinstance(exc, IntegrityError):
        return Conflict()
    if isinstance(exc, drf_exceptions.APIException) and exc.status_code < 500:
        # Method not allowed, throttled, not acceptable: keep DRF's status.
        return DomainError(str(exc.detail), status_code=exc.status_code)
    return InternalError()


def custom_exception_handler(exc: Exception, context: dict[str, Any]) -> Response:
    """Wrap every failure in the `{ "message", "status", "data" }` shape.

    Unexpected exceptions (database outages, denylist outages, bugs) become a
    bare 500; the original error and traceback only go to the log.
    """

    error = to_domain_error(exc)
    view = context.get("view")
    view_name = type(view).__name__ if view is not None else "unknown view"

    if error.status_code >= 500:
        logger.error("%s failed in %s: %s", error.kind.value, view_name, exc, exc_info=exc)
    else:
        logger.info("%s in %s: %s", error.kind.value, view_name, error.message)

    response = Response(error.envelope(), status=error.status_code)
    auth_header = getattr(exc, "auth_header", None)
    if error.status_code == status.HTTP_401_UNAUTHORIZED:
        response["WWW-Authenticate"] = auth_header or BEARER_CHALLENGE
    return response


def not_found_view(request, exception=None) -> JsonResponse:
    """JSON replacement for Django's HTML 404 page on unknown URLs."""
    return JsonResponse(NotFound("Route not found", data={"path": request.path}).envelope(), status=404)


def server_error_view(request) -> JsonResponse:
    """JSON replacement for Django's HTML 500 page."""
    return JsonResponse(InternalError().envelope(), status=500)


__all__ = [
    "ErrorKind",
    "DomainError",
    "InvalidParameter",
    "Unauthorized",
    "Forbidden",
    "NotFound",
    "Conflict",
    "InternalError",
    "to_domain_error",
    "custom_exception_handler",
]
