"""Article resource: CRUD, per-author listing, gallery uploads and opinions."""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response

from assets.serializers import AssetSerializer
from assets.storage import GALLERY_DIRECTORY, AssetUploader
from core.exceptions import Forbidden, NotFound
from core.resources import ResourceViewSet
from core.response import api_response
from opinions.models import Opinion
from opinions.serializers import OpinionSerializer, OpinionTypeSerializer
from .models import Article
from .serializers import ArticleSerializer

logger = logging.getLogger(__name__)

User = get_user_model()


class ArticleViewSet(ResourceViewSet):
    queryset = Article.objects.all()
    serializer_class = ArticleSerializer
    resource_name = "Article"
    owner_field = "author"

    gallery_uploader = AssetUploader(GALLERY_DIRECTORY, "articles", multiple=True)

    def perform_create(self, serializer):
        """Attach the current user as author on create."""
        return self.save_unique(serializer, author=self.request.user)

    @action(detail=False, methods=["get"], url_path=r"user/(?P<user_id>[^/.]+)")
    def by_author(self, request, user_id=None):
        """List one author's articles with the usual window and include rules."""
        author = self.find(user_id, queryset=User.objects.all(), resource_name="User")
        return self.list_window(self.get_queryset().filter(author=author))

    @action(
        detail=True,
        methods=["post"],
        url_path="upload-file",
        parser_classes=[MultiPartParser, FormParser],
    )
    def upload_file(self, request, pk=None):
        """Append uploaded images to the article's gallery."""
        uploads = self.gallery_uploader.files_from(request)
        article = self.get_object()
        assets = self.gallery_uploader.append(article, uploads)
        logger.info("%d file(s) added to article %s", len(assets), article.pk)
        return api_response(
            AssetSerializer(assets, many=True).data,
            status=status.HTTP_201_CREATED,
            message="Files uploaded",
        )

    @action(detail=True, methods=["post", "delete"], url_path=r"opinion/(?P<user_id>[^/.]+)")
    def opinion(self, request, pk=None, user_id=None):
        """Create, change (POST) or remove (DELETE) a user's opinion on an article."""
        if request.method == "DELETE":
            return self._delete_opinion(request, pk, user_id)
        return self._upsert_opinion(request, pk, user_id)

    def _opinion_parties(self, request, pk, user_id):
        article = self.find(pk, queryset=Article.objects.all())
        user = self.find(user_id, queryset=User.objects.all(), resource_name="User")
        if user.pk != request.user.pk:
            raise Forbidden("Opinions can only be managed by their own user.")
        return article, user

    def _upsert_opinion(self, request, pk, user_id):
        body = OpinionTypeSerializer(data=request.data)
        body.is_valid(raise_exception=True)
        opinion_type = body.validated_data["opinionType"]

        article, user = self._opinion_parties(request, pk, user_id)
        with self.conflict_guard(
            {"user": user, "article": article}, unique_fields=("user", "article"), resource_name="Opinion"
        ):
            opinion, created = Opinion.objects.update_or_create(
                user=user,
                article=article,
                defaults={"opinion_type": opinion_type},
            )
        logger.info("Opinion %s of user %s on article %s", opinion_type, user.pk, article.pk)
        return api_response(
            OpinionSerializer(opinion).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
            message="Opinion created" if created else "Opinion updated",
        )

    def _delete_opinion(self, request, pk, user_id):
        article, user = self._opinion_parties(request, pk, user_id)
        with transaction.atomic():
            deleted, _ = Opinion.objects.filter(user=user, article=article).delete()
        if not deleted:
            raise NotFound("Opinion not found", data={"articleId": str(article.pk), "userId": str(user.pk)})
        # 204 responses must not include a body.
        return Response(status=status.HTTP_204_NO_CONTENT)


__all__ = ["ArticleViewSet"]
