"""Routing for the Opinion viewset, mounted under /opinion/."""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import OpinionViewSet

router = SimpleRouter()
router.register(r"", OpinionViewSet, basename="opinion")

urlpatterns = [
    path("", include(router.urls)),
]
