"""
AppConfig for the `ownership` app.

Startup responsibilities
------------------------
- Populate the owner type registry from `settings.OWNERSHIP_OWNER_TYPES`
  (`{"tag": "app_label.ModelName"}`). This is the only place the registry is
  written during normal operation.
- Connect the default-owner `pre_save` hook for every installed owned model.
- Import **schema** (optional): drf-spectacular extension for the owner field.
  In DEBUG we still surface errors to catch schema issues early.

Reliability notes
-----------------
- Django's autoreloader may call `ready()` more than once; registering the same
  tag/model pair again is a no-op and hook receivers use `dispatch_uid`.
"""

from __future__ import annotations

import logging
from importlib import import_module

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class OwnershipConfig(AppConfig):
    """Registers owner types and the pre-persist hook at start-up."""
    default_auto_field = "django.db.models.BigAutoField"
    name = "ownership"

    def ready(self) -> None:
        from .hooks import connect_owned_models
        from .registry import owner_types

        owner_types.register_many(getattr(settings, "OWNERSHIP_OWNER_TYPES", {}))
        logger.debug("Registered owner types: %s", ", ".join(owner_types.tags()) or "-")
        connect_owned_models()
        self._import_startup_module("ownership.schema", required=False)

    @staticmethod
    def _import_startup_module(dotted_path: str, *, required: bool) -> None:
        """
        Import a module at startup with sensible error handling.

        - If `required` and import fails: log and re-raise (fail fast).
        - If not required: re-raise in DEBUG, otherwise log a warning and continue.
        """
        try:
            import_module(dotted_path)
        except Exception:
            if required or settings.DEBUG:
                logger.exception("Failed to import startup module: %s", dotted_path)
                raise
            logger.warning("Optional startup module failed to import and was skipped: %s", dotted_path)
