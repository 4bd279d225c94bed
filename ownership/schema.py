"""
drf-spectacular helpers for OpenAPI schema generation.

Purpose
-------
- Reusable response shapes for ownership actions (owner summary, validation error).
- Custom field extension for `OwnerReferenceField` to document the `{type,id}`
  union with the tags registered at start-up.

Notes
-----
- This module is **imported at startup** by `ownership.apps.OwnershipConfig.ready()`.
  It must remain side-effect free beyond constant definitions and the extension
  class registration so schema generation stays deterministic.
"""

from __future__ import annotations

from drf_spectacular.extensions import OpenApiSerializerFieldExtension
from drf_spectacular.utils import OpenApiResponse, inline_serializer
from rest_framework import serializers

from .registry import owner_types

OWNER_SUMMARY_RESPONSE = OpenApiResponse(
    response=inline_serializer(
        name="OwnerSummary",
        fields={
            "id": serializers.IntegerField(),
            "owner": serializers.DictField(allow_null=True),
        },
    ),
    description="Record id and its owner reference after the change",
)

VALIDATION_ERROR_RESPONSE = OpenApiResponse(
    response=inline_serializer(
        name="OwnershipValidationError",
        fields={
            "owner": serializers.ListField(child=serializers.CharField(), required=False),
            "detail": serializers.CharField(required=False),
        },
    ),
    description="Validation error (e.g. owner type not allowed for this record)",
)


class OwnerReferenceFieldExtension(OpenApiSerializerFieldExtension):
    """
    OpenAPI mapping for ownership.serializers.OwnerReferenceField.

    Schema shape:
        {
          "type": <one of the registered owner tags>,
          "id":   <primary key>
        }
    """
    target_class = "ownership.serializers.OwnerReferenceField"

    def map_serializer_field(self, auto_schema, direction):
        # NOTE: `direction` is unused; this mapping is identical for read/write.
        return {
            "type": "object",
            "properties": {
                "type": {"type": "string", "enum": sorted(owner_types.tags())},
                "id": {"oneOf": [{"type": "integer"}, {"type": "string"}]},
            },
            "required": ["type", "id"],
            "additionalProperties": False,
        }
