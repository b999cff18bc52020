"""Serializers for the User resource."""

from rest_framework import serializers

from core.resources import IncludeModelSerializer
from .models import User


class UserSerializer(IncludeModelSerializer):
    """User payload; the password is accepted on write and never returned.

    Email uniqueness is left to the database constraint so that duplicates are
    reported as a conflict rather than a validation error.
    """

    includes = {
        "articles": ("articles.serializers.ArticleSerializer", True),
        "opinions": ("opinions.serializers.OpinionSerializer", True),
        "avatar": ("assets.serializers.AssetSerializer", False),
    }

    email = serializers.EmailField(max_length=254)
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        """Expose identity fields; id and timestamps are assigned by the server."""
        model = User
        fields = ["id", "name", "email", "password", "createdAt", "updatedAt"]
        read_only_fields = ["id"]

    def validate_email(self, value):
        return User.objects.normalize_email(value)

    def create(self, validated_data):
        """Create a user through the manager so the password is bcrypt-hashed."""
        return User.objects.create_user(**validated_data)

    def update(self, instance, validated_data):
        """Re-hash the password when a new one is supplied."""
        password = validated_data.pop("password", None)
        if password is not None:
            instance.set_password(password)
        return super().update(instance, validated_data)


__all__ = ["UserSerializer"]
