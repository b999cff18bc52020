"""User resource: CRUD, profile, and single-slot avatar upload."""

import logging

from rest_framework import permissions, status
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, MultiPartParser

from assets.serializers import AssetSerializer
from assets.storage import AVATAR_DIRECTORY, AssetUploader
from core.exceptions import Unauthorized
from core.resources import ResourceViewSet
from core.response import api_response
from .models import User
from .serializers import UserSerializer

logger = logging.getLogger(__name__)


class UserViewSet(ResourceViewSet):
    queryset = User.objects.all()
    serializer_class = UserSerializer
    resource_name = "User"
    unique_fields = ("email",)
    owner_field = ""

    avatar_uploader = AssetUploader(AVATAR_DIRECTORY, "avatar")

    def get_permissions(self):
        # Registration is open; everything else follows the ownership rule.
        if self.action == "create":
            return [permissions.AllowAny()]
        return super().get_permissions()

    @action(detail=False, methods=["get"])
    def me(self, request):
        """Return the authenticated user's own profile."""
        if not request.user.is_authenticated:
            raise Unauthorized("Authentication required")
        user = self.find(request.user.pk)
        return api_response(self.get_serializer(user).data)

    @action(
        detail=True,
        methods=["post"],
        url_path="upload-avatar",
        parser_classes=[MultiPartParser, FormParser],
    )
    def upload_avatar(self, request, pk=None):
        """Store a new avatar, replacing (and deleting) the previous file if any."""
        upload = self.avatar_uploader.files_from(request)[0]
        user = self.get_object()
        asset, created = self.avatar_uploader.replace(user, upload)
        logger.info("Avatar %s stored for user %s", asset.filename, user.pk)
        return api_response(
            AssetSerializer(asset).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
            message="Avatar uploaded" if created else "Avatar replaced",
        )


__all__ = ["UserViewSet"]
