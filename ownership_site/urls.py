"""
Project URL configuration.

Surfaces
--------
- `/api/`: router-driven ViewSets for owned workspace resources, each with
  `change-owner/` and `abandon/` actions.
- `/api/schema`, `/api/docs`: OpenAPI schema & UI.
"""

from __future__ import annotations

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from workspace.api import AssetViewSet, DocumentViewSet, DraftViewSet, TeamViewSet

router = DefaultRouter()
router.register(r"teams", TeamViewSet, basename="team")
router.register(r"documents", DocumentViewSet, basename="document")
router.register(r"drafts", DraftViewSet, basename="draft")
router.register(r"assets", AssetViewSet, basename="asset")

urlpatterns = [
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/", include(router.urls)),
]
