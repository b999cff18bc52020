"""App configuration for the users resource."""

from django.apps import AppConfig


class UsersConfig(AppConfig):
    """Users app holds the custom User model and its resource controller."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "users"
