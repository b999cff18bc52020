"""Opinion model: one LIKE or DISLIKE per user and article."""

import uuid

from django.conf import settings
from django.db import models


class OpinionType(models.TextChoices):
    LIKE = "LIKE"
    DISLIKE = "DISLIKE"


class Opinion(models.Model):
    """A user's reaction to an article; the pair (user, article) is unique."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    opinion_type = models.CharField(max_length=7, choices=OpinionType.choices)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="opinions")
    article = models.ForeignKey("articles.Article", on_delete=models.CASCADE, related_name="opinions")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "id"]
        constraints = [
            models.UniqueConstraint(fields=["user", "article"], name="unique_opinion_per_user_article"),
        ]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.user_id} {self.opinion_type} {self.article_id}"


__all__ = ["Opinion", "OpinionType"]
