"""System checks for resource controllers and upload storage."""

import os

from django.conf import settings
from django.core.checks import Error, Warning, register


@register()
def resource_views_are_configured(app_configs, **kwargs):
    """Ensure every mounted resource viewset names itself and supports include-sets."""
    errors: list[Error] = []

    # Import here to avoid circular imports at module load time.
    from articles.views import ArticleViewSet
    from assets.views import AssetViewSet
    from core.resources import IncludeModelSerializer, ResourceViewSet
    from opinions.views import OpinionViewSet
    from users.views import UserViewSet

    for view_cls in (UserViewSet, ArticleViewSet, OpinionViewSet, AssetViewSet):
        if view_cls.resource_name == ResourceViewSet.resource_name:
            errors.append(
                Error(
                    f"{view_cls.__name__} does not define resource_name.",
                    obj=view_cls,
                    id="core.E001",
                )
            )
        serializer_class = getattr(view_cls, "serializer_class", None)
        if serializer_class is None or not issubclass(serializer_class, IncludeModelSerializer):
            errors.append(
                Error(
                    f"{view_cls.__name__}.serializer_class must subclass IncludeModelSerializer.",
                    obj=view_cls,
                    id="core.E002",
                )
            )

    return errors


@register()
def media_root_is_writable(app_configs, **kwargs):
    """Warn when uploads cannot be written under MEDIA_ROOT."""
    media_root = str(settings.MEDIA_ROOT)
    probe = media_root
    # The directory is created on first upload; check its nearest existing parent.
    while probe and not os.path.exists(probe):
        parent = os.path.dirname(probe)
        if parent == probe:
            break
        probe = parent
    if not os.access(probe, os.W_OK):
        return [
            Warning(
                f"MEDIA_ROOT {media_root} is not writable; uploads will fail.",
                id="core.W001",
            )
        ]
    return []
