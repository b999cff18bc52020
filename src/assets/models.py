"""Asset model: metadata of an uploaded file and its single owner."""

import uuid

from django.conf import settings
from django.db import models
from django.db.models import Q


class Asset(models.Model):
    """A stored file owned either by a user (avatar) or by an article (gallery).

    ``path`` is the storage-relative name of the backing file; deleting the row
    deletes the file (see ``assets.signals``).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    filename = models.CharField(max_length=255)
    path = models.CharField(max_length=500)
    mimetype = models.CharField(max_length=127)
    size = models.PositiveBigIntegerField()
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="avatar",
        null=True,
        blank=True,
    )
    article = models.ForeignKey(
        "articles.Article",
        on_delete=models.CASCADE,
        related_name="assets",
        null=True,
        blank=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "id"]
        constraints = [
            models.CheckConstraint(
                condition=(Q(user__isnull=False) & Q(article__isnull=True))
                | (Q(user__isnull=True) & Q(article__isnull=False)),
                name="asset_has_exactly_one_owner",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.filename


__all__ = ["Asset"]
