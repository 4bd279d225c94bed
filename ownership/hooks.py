"""
Pre-persist hook: default-owner injection on insert.

Overview
--------
- `apply_default_owner` is a `pre_save` receiver. It runs only for inserts
  (`instance._state.adding`) and never for raw fixture loads, then delegates to
  `OwnershipMixin.apply_default_owner()` which consumes the instance's pending
  `with_default_owner()` / `without_default_owner()` request.
- Receivers are connected explicitly, one per owned model, by
  `OwnershipConfig.ready()` via `connect_owned_models()`. Models created outside
  installed apps can opt in with `connect_owned_model(Model)`.

Reliability
-----------
- Every connection carries a stable `dispatch_uid`, so repeated `ready()` calls
  (autoreloader, test runners) do not register duplicates.
"""

from __future__ import annotations

import logging
from typing import List, Type

from django.apps import apps
from django.db import models
from django.db.models.signals import pre_save

from .models import OwnershipMixin

logger = logging.getLogger(__name__)


def apply_default_owner(sender, instance: OwnershipMixin, raw: bool = False, **kwargs) -> None:
    """Fill the owner of a row being inserted from its pending default (or the current actor)."""
    if raw or not instance._state.adding:
        return
    instance.apply_default_owner()


def owned_models() -> List[Type[models.Model]]:
    """Every installed concrete model that mixes in ownership."""
    return [m for m in apps.get_models() if issubclass(m, OwnershipMixin)]


def connect_owned_model(model: Type[models.Model]) -> None:
    pre_save.connect(
        apply_default_owner,
        sender=model,
        dispatch_uid=f"ownership.default_owner.{model._meta.label_lower}",
    )


def connect_owned_models() -> List[Type[models.Model]]:
    """Connect the default-owner hook for all owned models; returns them."""
    found = owned_models()
    for model in found:
        connect_owned_model(model)
    logger.debug("Default-owner hook connected for: %s", ", ".join(m._meta.label for m in found) or "-")
    return found
