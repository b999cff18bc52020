"""Routing for the Asset viewset, mounted under /file/."""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import AssetViewSet

router = SimpleRouter()
router.register(r"", AssetViewSet, basename="asset")

urlpatterns = [
    path("", include(router.urls)),
]
