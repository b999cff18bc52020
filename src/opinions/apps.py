"""App configuration for the opinions resource."""

from django.apps import AppConfig


class OpinionsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "opinions"
