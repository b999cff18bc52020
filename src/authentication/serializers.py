"""Serializers for authentication flows (login)."""

import logging

from django.contrib.auth import get_user_model
from rest_framework import serializers

from core.exceptions import Unauthorized
from users.managers import UserManager

logger = logging.getLogger(__name__)

User = get_user_model()


class LoginSerializer(serializers.Serializer):
    """Authenticate a user via email/password using bcrypt verification."""

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate(self, attrs):
        """Authenticate credentials and attach the user to validated_data."""
        email = attrs.get("email")
        password = attrs.get("password")
        try:
            user = User.objects.get(email=User.objects.normalize_email(email))
        except User.DoesNotExist:
            logger.info("Login failed for unknown email %s", email)
            raise Unauthorized("Invalid email or password")

        if not UserManager.verify_password(user, password):
            logger.info("Login failed for user %s: wrong password", user.pk)
            raise Unauthorized("Invalid email or password")

        attrs["user"] = user
        return attrs


__all__ = ["LoginSerializer"]
