"""
Permission classes for owned records.

This module exposes:
- `IsOwner`: object-level guard that allows access only when the record is
  owned by one of the view's owner candidates (by default just `request.user`).

Usage
-----
- Combine with authentication and scope querysets the same way:
      permission_classes = [IsAuthenticated, IsOwner]
      def get_queryset(self):
          return Model.objects.where_owned_by_any(self.get_owner_candidates())

Security
--------
# SECURITY: Always scope list/queryset endpoints in addition to object-level
# checks to avoid leaking object existence via filtering/ordering.
"""

from rest_framework.permissions import BasePermission


class IsOwner(BasePermission):
    """
    Object-level permission: only an owner of `obj` can access/mutate it.

    Views may define `get_owner_candidates()` to accept more than the requesting
    user (e.g. teams the user runs). Anonymous users are always refused.
    """

    def has_object_permission(self, request, view, obj) -> bool:
        user = getattr(request, "user", None)
        if not user or not getattr(user, "is_authenticated", False):
            return False
        get_candidates = getattr(view, "get_owner_candidates", None)
        candidates = get_candidates() if get_candidates else [user]
        return any(obj.is_owned_by(candidate) for candidate in candidates)
