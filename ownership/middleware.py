"""
Request middleware binding the current actor.

`CurrentActorMiddleware`
------------------------
- Must sit after `AuthenticationMiddleware` so `request.user` is available.
- Binds the authenticated user (or None for anonymous requests) to
  `ownership.actor.current_actor_var` for the duration of the request, then
  restores the previous value so nothing leaks into the next request served by
  the same thread.
- Exposes the actor as `request.actor` for views that want it explicitly.
"""

from __future__ import annotations

from typing import Callable

from django.http import HttpRequest, HttpResponse

from .actor import current_actor_var, normalize_actor


class CurrentActorMiddleware:
    """Bind `request.user` as the current actor for this request."""

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        actor = normalize_actor(getattr(request, "user", None))
        setattr(request, "actor", actor)
        token = current_actor_var.set(actor)
        try:
            return self.get_response(request)
        finally:
            current_actor_var.reset(token)
