"""App configuration for uploaded assets."""

from django.apps import AppConfig


class AssetsConfig(AppConfig):
    """Assets app holds upload metadata and the file storage protocol."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "assets"

    def ready(self) -> None:
        """Connect the handler that removes backing files of deleted assets."""
        from . import signals  # noqa: F401
