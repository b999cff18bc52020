"""Serializers for the Article resource."""

from rest_framework import serializers

from core.resources import IncludeModelSerializer
from .models import Article


class ArticleSerializer(IncludeModelSerializer):
    includes = {
        "author": ("users.serializers.UserSerializer", False),
        "opinions": ("opinions.serializers.OpinionSerializer", True),
        "assets": ("assets.serializers.AssetSerializer", True),
    }

    authorId = serializers.PrimaryKeyRelatedField(source="author", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        """Expose article fields while keeping authorship and timestamps read-only."""
        model = Article
        fields = ["id", "title", "content", "authorId", "createdAt", "updatedAt"]
        read_only_fields = ["id"]


__all__ = ["ArticleSerializer"]
