"""Opinion resource: generic CRUD over LIKE/DISLIKE reactions."""

from core.exceptions import Forbidden
from core.resources import ResourceViewSet
from .models import Opinion
from .serializers import OpinionSerializer


class OpinionViewSet(ResourceViewSet):
    queryset = Opinion.objects.all()
    serializer_class = OpinionSerializer
    resource_name = "Opinion"
    unique_fields = ("user", "article")
    owner_field = "user"

    def perform_create(self, serializer):
        """Only allow users to create opinions in their own name."""
        if serializer.validated_data["user"].pk != self.request.user.pk:
            raise Forbidden("Opinions can only be created for the authenticated user.")
        return self.save_unique(serializer)

    def perform_update(self, serializer):
        user = serializer.validated_data.get("user")
        if user is not None and user.pk != self.request.user.pk:
            raise Forbidden("Opinions cannot be transferred to another user.")
        return self.save_unique(serializer)


__all__ = ["OpinionViewSet"]
