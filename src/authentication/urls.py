"""URL patterns for authentication endpoints."""

from django.urls import re_path

from .views import LoginView, LogoutView

urlpatterns = [
    re_path(r"^login/?$", LoginView.as_view(), name="auth-login"),
    re_path(r"^logout/?$", LogoutView.as_view(), name="auth-logout"),
]
