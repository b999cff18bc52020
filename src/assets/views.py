"""Asset resource: list, read and delete stored file metadata.

Assets are only created through the upload endpoints (``/user/{id}/upload-avatar/``
and ``/article/{id}/upload-file/``), so create and update are not routed here.
Deleting an asset also deletes its backing file.
"""

from core.resources import ResourceViewSet
from .models import Asset
from .serializers import AssetSerializer


class AssetViewSet(ResourceViewSet):
    queryset = Asset.objects.all()
    serializer_class = AssetSerializer
    resource_name = "Asset"
    http_method_names = ["get", "delete", "head", "options"]

    def owner_of(self, obj):
        """Avatars belong to their user, gallery images to the article's author."""
        if obj.user_id is not None:
            return obj.user
        return obj.article.author if obj.article_id is not None else None


__all__ = ["AssetViewSet"]
