"""App configuration for authentication components."""

from django.apps import AppConfig


class AuthenticationConfig(AppConfig):
    """Authentication app holds login/logout and the token service."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "authentication"
