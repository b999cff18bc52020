"""Authentication endpoints: login and logout."""

import logging
from typing import Any

from rest_framework import status
from rest_framework.response import Response

from core.exceptions import Unauthorized
from core.middleware import get_bearer_token
from core.response import BaseAPIView, api_response
from .serializers import LoginSerializer
from .services import get_token_service

logger = logging.getLogger(__name__)


class LoginView(BaseAPIView):
    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        """Authenticate and issue a bearer token."""
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]
        token = get_token_service().issue(user)
        logger.info("User %s logged in", user.email)
        return api_response({"token": token}, message="Logged in successfully")


class LogoutView(BaseAPIView):
    """Invalidate the presented bearer token by adding it to the denylist."""

    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        """Revoke the bearer token and return 204 No Content."""
        token = get_bearer_token(request)
        if not token or not request.user.is_authenticated:
            raise Unauthorized("Not logged in")

        get_token_service().revoke(token)
        logger.info("User %s logged out", request.user.pk)
        # 204 responses must not include a body.
        return Response(status=status.HTTP_204_NO_CONTENT)
