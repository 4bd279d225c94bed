"""
AppConfig for the `workspace` app.

Scope
-----
Example domain built on the ownership layer:
- `Team` is an owner type ("team") and is itself owned by a user (`HasOwner`).
- `Document`, `Draft` and `Asset` are polymorphic owned records with different
  allow-lists and default-owner settings.

No startup hooks live here; `ownership.apps.OwnershipConfig.ready()` connects
the default-owner hook for these models.
"""

from django.apps import AppConfig


class WorkspaceConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "workspace"
