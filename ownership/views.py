from __future__ import annotations

"""
ViewSet building blocks for owned records.

Highlights
----------
- `OwnedRecordViewSet`:
  * Requires authentication and object-level ownership (`IsOwner`).
  * Scopes querysets to rows owned by one of `get_owner_candidates()` (by
    default only `request.user`).
- `OwnershipOpsMixin` adds two actions to any owned-record ViewSet:
  * `POST /<resource>/{id}/change-owner/` with `{"owner": {"type", "id"}}`.
  * `POST /<resource>/{id}/abandon/` clears the owner reference.

Security
--------
- Lists and details are always filtered to the current owner candidates.
- Ownership errors (type not allowed / unknown type) become 400 responses; the
  record is left unchanged.
"""

from typing import Any, Dict, List

from django.db import transaction
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from .exceptions import InvalidOwnerType, UnregisteredOwnerType
from .permissions import IsOwner
from .schema import OWNER_SUMMARY_RESPONSE, VALIDATION_ERROR_RESPONSE
from .serializers import ChangeOwnerSerializer, OwnerReferenceField, ownership_error_detail


def owner_summary(record) -> Dict[str, Any]:
    """`{"id": <pk>, "owner": {"type", "id"} | None}` for action responses."""
    owner = record.get_owner()
    return {
        "id": record.pk,
        "owner": OwnerReferenceField().to_representation(owner) if owner is not None else None,
    }


class OwnedRecordViewSet(viewsets.ModelViewSet):
    """
    Base ViewSet that standardizes ownership scoping.

    Features:
        - Requires `IsAuthenticated` and `IsOwner` (object-level).
        - Scopes the QuerySet to `get_owner_candidates()` in `get_queryset()`.
    """
    permission_classes = [IsAuthenticated, IsOwner]

    def get_owner_candidates(self) -> List[Any]:
        """Owners whose records this request may see. Override to widen."""
        user = getattr(self.request, "user", None)
        if not user or not user.is_authenticated:
            return []
        return [user]

    def get_queryset(self):
        """
        Restrict base queryset to the owner candidates.

        # SECURITY: Prevents cross-owner leakage for list/detail routes.
        """
        base_qs = super().get_queryset()
        if getattr(self, "swagger_fake_view", False):
            return base_qs.none()
        candidates = self.get_owner_candidates()
        if not candidates:
            return base_qs.none()
        return base_qs.where_owned_by_any(candidates)


class OwnershipOpsMixin:
    """
    Adds ops to an owned-record ViewSet:
      - POST /<resource>/{id}/change-owner/
      - POST /<resource>/{id}/abandon/
    """

    @extend_schema(
        tags=["Ownership"],
        request=ChangeOwnerSerializer,
        responses={200: OWNER_SUMMARY_RESPONSE, 400: VALIDATION_ERROR_RESPONSE},
        description="Transfer this record to another owner. The new owner's type must be allowed.",
    )
    @action(detail=True, methods=["post"], url_path="change-owner")
    def change_owner(self, request: Request, pk: str | None = None) -> Response:
        """Validate the requested owner and re-assign the record."""
        record = self.get_object()
        ser = ChangeOwnerSerializer(data=request.data, context=self.get_serializer_context())
        ser.is_valid(raise_exception=True)
        try:
            with transaction.atomic():
                record.change_owner_to(ser.validated_data["owner"])
        except (InvalidOwnerType, UnregisteredOwnerType) as exc:
            raise ownership_error_detail(exc)
        return Response(owner_summary(record), status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Ownership"],
        request=None,
        responses={200: OWNER_SUMMARY_RESPONSE},
        description="Clear the owner of this record. The caller loses access to it afterwards.",
    )
    @action(detail=True, methods=["post"], url_path="abandon")
    def abandon(self, request: Request, pk: str | None = None) -> Response:
        """Clear the owner reference."""
        record = self.get_object()
        with transaction.atomic():
            record.abandon_owner()
        return Response(owner_summary(record), status=status.HTTP_200_OK)
