"""Response helpers and base classes for consistent API envelopes."""

import logging
from typing import Any

from django.conf import settings
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.viewsets import GenericViewSet

logger = logging.getLogger(__name__)


def api_response(data: Any, status: int = 200, message: str = "Success") -> Response:
    """Return data wrapped in the standard envelope.

    All successful JSON responses should use this helper to ensure the
    `{ "message": ..., "data": ... }` shape.
    """

    return Response({"message": message, "data": data}, status=status)


def _is_enveloped(payload: Any) -> bool:
    return isinstance(payload, dict) and "message" in payload and "data" in payload


class EnvelopeMixin:
    """Mixin to wrap successful responses in the standard envelope and log them."""

    def finalize_response(self, request, response, *args, **kwargs):  # type: ignore[override]
        """Ensure non-error responses include the `{message, data}` envelope."""
        if hasattr(response, "data") and response.status_code and response.status_code < 400:
            if response.status_code != 204 and not _is_enveloped(response.data):
                response.data = {"message": "Success", "data": response.data}

        logger.info("%s %s: %s", request.path, response.status_code, request.method)
        if getattr(settings, "LOG_DATA", False) and response.status_code < 400:
            logger.debug("%s payload: %s", request.path, getattr(response, "data", None))

        # DRF's APIView/GenericViewSet provide finalize_response; mixin alone doesn't.
        return super().finalize_response(request, response, *args, **kwargs)  # type: ignore[attr-defined]


class BaseAPIView(EnvelopeMixin, APIView):
    """APIView that ensures successful responses use the standard envelope."""


class BaseViewSet(EnvelopeMixin, GenericViewSet):
    """GenericViewSet variant that wraps successful responses in the envelope."""
