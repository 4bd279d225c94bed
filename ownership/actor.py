"""
Current actor: "who is making this request/operation right now".

Overview
--------
- `current_actor_var` is a `contextvars.ContextVar` holding the actor (or None)
  for the lifetime of a request. `ownership.middleware.CurrentActorMiddleware`
  binds it from `request.user`.
- `acting_as(actor)` binds it for a block of code (management commands, tests,
  background jobs).
- `get_current_actor()` is the single query the ownership layer uses. It calls the
  provider named by `settings.OWNERSHIP_CURRENT_ACTOR_PROVIDER` (a dotted path to a
  zero-argument callable), defaulting to `get_context_actor`.

Anonymous users are normalised to None so callers only ever see "an owner" or
"nobody".
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, Optional

from django.conf import settings
from django.utils.module_loading import import_string

DEFAULT_PROVIDER = "ownership.actor.get_context_actor"

current_actor_var: ContextVar[Optional[Any]] = ContextVar("current_actor", default=None)


def normalize_actor(actor: Any) -> Optional[Any]:
    """Map anonymous/unauthenticated users to None; pass everything else through."""
    if actor is None:
        return None
    if getattr(actor, "is_anonymous", False):
        return None
    return actor


def get_context_actor() -> Optional[Any]:
    """Default provider: the actor bound to the current context."""
    return current_actor_var.get()


def get_current_actor() -> Optional[Any]:
    """Return the current actor via the configured provider, or None."""
    provider = import_string(getattr(settings, "OWNERSHIP_CURRENT_ACTOR_PROVIDER", DEFAULT_PROVIDER))
    return normalize_actor(provider())


@contextmanager
def acting_as(actor: Any) -> Iterator[Optional[Any]]:
    """Bind `actor` as the current actor inside the `with` block."""
    token = current_actor_var.set(normalize_actor(actor))
    try:
        yield current_actor_var.get()
    finally:
        current_actor_var.reset(token)
