"""Root URL configuration for the content API."""
from django.conf import settings
from django.conf.urls.static import static
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

urlpatterns = [
    path("auth/", include("authentication.urls")),
    path("user/", include("users.urls")),
    path("article/", include("articles.urls")),
    path("opinion/", include("opinions.urls")),
    path("file/", include("assets.urls")),
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api-docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="api-docs"),
]

# Uploaded files are served by Django only in development.
urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

handler404 = "core.exceptions.not_found_view"
handler500 = "core.exceptions.server_error_view"
