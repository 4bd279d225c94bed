from __future__ import annotations

"""
ViewSets for workspace resources with ownership scoping and ownership ops.

Highlights
----------
- Every resource extends `OwnedRecordViewSet` (auth + `IsOwner` + owner-scoped
  queryset) and `OwnershipOpsMixin` (`change-owner` / `abandon` actions).
- Assets may be owned by a team; a user sees assets owned by themselves or by
  any team they own (`get_owner_candidates`).
- List filtering: `?owner_type=` and `?unowned=` via `OwnerTypeFilterSet`, plus
  search and ordering on each resource's own fields.
"""

from typing import Any, List

from drf_spectacular.utils import extend_schema, extend_schema_view

from ownership.filters import OwnerTypeFilterSet
from ownership.views import OwnedRecordViewSet, OwnershipOpsMixin
from workspace.models import Asset, Document, Draft, Team
from workspace.serializers import AssetSerializer, DocumentSerializer, DraftSerializer, TeamSerializer


class AssetFilterSet(OwnerTypeFilterSet):
    class Meta:
        model = Asset
        fields = ["kind"]


class DocumentFilterSet(OwnerTypeFilterSet):
    class Meta:
        model = Document
        fields = ["title"]


@extend_schema_view(
    list=extend_schema(tags=["Teams"], description="List teams owned by the caller."),
    retrieve=extend_schema(tags=["Teams"], description="Retrieve a team."),
    create=extend_schema(tags=["Teams"], description="Create a team owned by the caller."),
    update=extend_schema(tags=["Teams"], description="Update a team."),
    partial_update=extend_schema(tags=["Teams"], description="Partial update a team."),
)
class TeamViewSet(OwnershipOpsMixin, OwnedRecordViewSet):
    """Team CRUD; the creating user owns the team."""
    lookup_value_regex = r"\d+"
    queryset = Team.objects.all()
    serializer_class = TeamSerializer
    search_fields = ["name"]
    ordering_fields = ["name", "created_at", "updated_at"]
    ordering = ["name"]


@extend_schema_view(
    list=extend_schema(tags=["Documents"], description="List documents owned by the caller."),
    retrieve=extend_schema(tags=["Documents"], description="Retrieve a document."),
    create=extend_schema(tags=["Documents"], description="Create a document (users only may own it)."),
    update=extend_schema(tags=["Documents"], description="Update a document."),
    partial_update=extend_schema(tags=["Documents"], description="Partial update a document."),
)
class DocumentViewSet(OwnershipOpsMixin, OwnedRecordViewSet):
    """Document CRUD; only users may own documents."""
    lookup_value_regex = r"\d+"
    queryset = Document.objects.all()
    serializer_class = DocumentSerializer
    filterset_class = DocumentFilterSet
    search_fields = ["title", "body"]
    ordering_fields = ["title", "created_at", "updated_at"]
    ordering = ["-created_at"]


@extend_schema_view(
    list=extend_schema(tags=["Drafts"], description="List drafts owned by the caller."),
    retrieve=extend_schema(tags=["Drafts"], description="Retrieve a draft."),
    create=extend_schema(tags=["Drafts"], description="Create a draft."),
    update=extend_schema(tags=["Drafts"], description="Update a draft."),
    partial_update=extend_schema(tags=["Drafts"], description="Partial update a draft."),
)
class DraftViewSet(OwnershipOpsMixin, OwnedRecordViewSet):
    """Draft CRUD."""
    lookup_value_regex = r"\d+"
    queryset = Draft.objects.all()
    serializer_class = DraftSerializer
    search_fields = ["title"]
    ordering_fields = ["title", "created_at", "updated_at"]
    ordering = ["-created_at"]


@extend_schema_view(
    list=extend_schema(tags=["Assets"], description="List assets owned by the caller or the caller's teams."),
    retrieve=extend_schema(tags=["Assets"], description="Retrieve an asset."),
    create=extend_schema(tags=["Assets"], description="Create an asset owned by the caller or one of their teams."),
    update=extend_schema(tags=["Assets"], description="Update an asset."),
    partial_update=extend_schema(tags=["Assets"], description="Partial update an asset."),
)
class AssetViewSet(OwnershipOpsMixin, OwnedRecordViewSet):
    """
    Asset CRUD. Visible to the owning user, or to the owner of the owning team.

    PERF:
        Team candidates are resolved once per request (one query).
    """
    lookup_value_regex = r"\d+"
    queryset = Asset.objects.all()
    serializer_class = AssetSerializer
    filterset_class = AssetFilterSet
    search_fields = ["name", "url"]
    ordering_fields = ["name", "kind", "created_at", "updated_at"]
    ordering = ["-created_at"]

    def get_owner_candidates(self) -> List[Any]:
        candidates = super().get_owner_candidates()
        if not candidates:
            return candidates
        if not hasattr(self, "_team_candidates"):
            self._team_candidates = list(Team.objects.where_owned_by(self.request.user))
        return [*candidates, *self._team_candidates]
