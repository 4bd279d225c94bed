"""
Serializers and fields for owned records.

Design goals
------------
- One wire shape for owners everywhere: `{"type": <registry tag>, "id": <key>}`.
- Owner assignment on create goes through the model's default-owner path, so
  allow-lists are enforced in exactly one place (the model), and the API maps
  ownership errors to 400 responses.
- Owner changes after creation go through the explicit `change-owner` action
  (see `ownership.views.OwnershipOpsMixin`); `owner` is ignored on update.
"""

from __future__ import annotations

from typing import Any, Dict

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from .exceptions import InvalidOwnerType, UnregisteredOwnerType
from .registry import owner_types


def ownership_error_detail(exc: Exception) -> serializers.ValidationError:
    """Translate an ownership error into a DRF validation error on `owner`."""
    code = "invalid_owner_type" if isinstance(exc, InvalidOwnerType) else "unregistered_owner_type"
    return serializers.ValidationError({"owner": [str(exc)]}, code=code)


class OwnerReferenceField(serializers.Field):
    """
    Polymorphic owner selector.

    Shape (input & output):
        {"type": "<registered tag>", "id": <primary key>}

    Behavior:
        - Serializes an owner instance to the compact shape via the registry.
        - Resolves input to the owner instance; unknown tags and missing rows fail.
        - Reads the owner through `instance.get_owner()` so it works for both
          storage flavours.
    """
    default_error_messages = {
        "invalid": "Expected an object with 'type' and 'id'.",
        "unknown_type": "Unknown owner type '{tag}'.",
        "not_found": "Owner not found.",
    }

    def get_attribute(self, instance):
        return instance.get_owner()

    def to_representation(self, value) -> Dict[str, Any]:
        return {"type": owner_types.tag_for(value), "id": value.pk}

    def to_internal_value(self, data):
        if not isinstance(data, dict) or "type" not in data or "id" not in data:
            self.fail("invalid")
        tag = data["type"]
        if tag not in owner_types:
            self.fail("unknown_type", tag=tag)
        try:
            owner = owner_types.load(tag, data["id"])
        except (ValueError, TypeError, DjangoValidationError):
            owner = None
        if owner is None:
            self.fail("not_found")
        return owner


class OwnedRecordSerializer(serializers.ModelSerializer):
    """
    Base ModelSerializer for owned models.

    - `owner` is optional on create; when omitted, the requesting user becomes the
      owner (subject to the model's allow-list, else the record stays unowned).
    - An explicit `"owner": null` on create stores the record unowned.
    - Subclasses list "owner" in `Meta.fields` alongside their own fields.
    """
    owner = OwnerReferenceField(required=False, allow_null=True)

    def validate_owner(self, value):
        """On create, only owners the view accepts for this request may be assigned."""
        view = self.context.get("view")
        get_candidates = getattr(view, "get_owner_candidates", None)
        if value is not None and self.instance is None and get_candidates is not None:
            if value not in get_candidates():
                raise serializers.ValidationError("You cannot create records for this owner.")
        return value

    def create(self, validated_data):
        explicit = "owner" in validated_data
        owner = validated_data.pop("owner", None)
        request = self.context.get("request")
        instance = self.Meta.model(**validated_data)
        if owner is not None:
            instance.with_default_owner(owner)
        elif explicit:
            # `"owner": null` asks for an unowned record.
            instance.without_default_owner()
        elif request is not None and instance.can_be_owned_by(request.user):
            instance.with_default_owner(request.user)
        try:
            instance.save()
        except (InvalidOwnerType, UnregisteredOwnerType) as exc:
            raise ownership_error_detail(exc)
        return instance

    def update(self, instance, validated_data):
        validated_data.pop("owner", None)
        return super().update(instance, validated_data)


class ChangeOwnerSerializer(serializers.Serializer):
    """Request body for `POST /<resource>/{id}/change-owner/`."""
    owner = OwnerReferenceField()
