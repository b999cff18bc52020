"""Serializers for the Opinion resource."""

from django.contrib.auth import get_user_model
from rest_framework import serializers

from articles.models import Article
from core.resources import IncludeModelSerializer
from .models import Opinion, OpinionType


class OpinionSerializer(IncludeModelSerializer):
    includes = {
        "user": ("users.serializers.UserSerializer", False),
        "article": ("articles.serializers.ArticleSerializer", False),
    }

    opinionType = serializers.ChoiceField(source="opinion_type", choices=OpinionType.choices)
    userId = serializers.PrimaryKeyRelatedField(source="user", queryset=get_user_model().objects.all())
    articleId = serializers.PrimaryKeyRelatedField(source="article", queryset=Article.objects.all())
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Opinion
        fields = ["id", "opinionType", "userId", "articleId", "createdAt", "updatedAt"]
        read_only_fields = ["id"]
        # The (user, article) constraint is enforced by the database and reported as Conflict.
        validators = []


class OpinionTypeSerializer(serializers.Serializer):
    """Body of the per-article opinion upsert: just the reaction."""

    opinionType = serializers.ChoiceField(
        choices=OpinionType.choices,
        error_messages={"invalid_choice": "Wrong value for 'opinionType'. Must be 'DISLIKE' or 'LIKE'"},
    )


__all__ = ["OpinionSerializer", "OpinionTypeSerializer"]
