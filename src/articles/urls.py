"""Routing for the Article viewset, mounted under /article/."""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import ArticleViewSet

router = SimpleRouter()
router.register(r"", ArticleViewSet, basename="article")

urlpatterns = [
    path("", include(router.urls)),
]
