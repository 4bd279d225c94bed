"""
Logging helpers for actor-scoped correlation.

Overview
--------
- `ActorFilter` is a `logging.Filter` that injects `actor` onto every `LogRecord`
  so formatters using `%(actor)s` never break, even when the line is emitted
  outside an HTTP request (management commands, shell).
- The value is `"<tag>:<key>"` for a registered owner, `"<app_label.Model>:<key>"`
  for anything else, and a safe dash `"-"` when nobody is acting.

Usage
-----
Configure the filter on handlers in Django `LOGGING`:

    "filters": {"actor": {"()": "ownership.logging.ActorFilter"}}
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from .actor import current_actor_var
from .registry import owner_types


def describe_owner(owner: Optional[Any]) -> str:
    """Compact `tag:key` label for an owner, used in log lines."""
    if owner is None:
        return "-"
    if owner_types.is_registered(owner):
        return f"{owner_types.tag_for(owner)}:{owner.pk}"
    meta = getattr(owner, "_meta", None)
    label = meta.label if meta is not None else owner.__class__.__name__
    return f"{label}:{getattr(owner, 'pk', None)}"


class ActorFilter(logging.Filter):
    """Ensures `%(actor)s` is always present in log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "actor"):
            record.actor = describe_owner(current_actor_var.get())
        return True
