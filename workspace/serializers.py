"""
Serializers for workspace resources.

- All owned resources extend `OwnedRecordSerializer`, which exposes `owner` as
  `{"type": <tag>, "id": <key>}` and assigns it on create (explicit value, or
  the requesting user when their type is allowed).
- `owner` is read-only after creation; use the `change-owner` / `abandon`
  actions instead.
"""

from __future__ import annotations

from ownership.serializers import OwnedRecordSerializer
from workspace.models import Asset, Document, Draft, Team


class TeamSerializer(OwnedRecordSerializer):
    class Meta:
        model = Team
        fields = ["id", "name", "owner", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]


class DocumentSerializer(OwnedRecordSerializer):
    class Meta:
        model = Document
        fields = ["id", "title", "body", "owner", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]


class DraftSerializer(OwnedRecordSerializer):
    class Meta:
        model = Draft
        fields = ["id", "title", "owner", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]


class AssetSerializer(OwnedRecordSerializer):
    class Meta:
        model = Asset
        fields = ["id", "name", "kind", "url", "owner", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]
