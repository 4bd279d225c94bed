# Explicit re-exports for router imports like:
#   from workspace.api import AssetViewSet, ...

from .viewsets import (
    AssetViewSet,
    DocumentViewSet,
    DraftViewSet,
    TeamViewSet,
)

__all__ = [
    "AssetViewSet",
    "DocumentViewSet",
    "DraftViewSet",
    "TeamViewSet",
]
