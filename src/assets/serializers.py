"""Serializers for the Asset resource."""

from rest_framework import serializers

from core.resources import IncludeModelSerializer
from .models import Asset


class AssetSerializer(IncludeModelSerializer):
    """Read-only view of stored file metadata; rows are written by uploads."""

    includes = {
        "user": ("users.serializers.UserSerializer", False),
        "article": ("articles.serializers.ArticleSerializer", False),
    }

    userId = serializers.PrimaryKeyRelatedField(source="user", read_only=True)
    articleId = serializers.PrimaryKeyRelatedField(source="article", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Asset
        fields = ["id", "filename", "path", "mimetype", "size", "userId", "articleId", "createdAt", "updatedAt"]
        read_only_fields = fields


__all__ = ["AssetSerializer"]
