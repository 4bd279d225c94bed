"""
Errors raised by the ownership layer.

Two failure kinds exist:
- `InvalidOwnerType`: the candidate owner's type is not on the owned model's
  allow-list (`allowed_owner_types`, or the FK target for `HasOwner`).
- `UnregisteredOwnerType`: a tag (stored or requested) or an owner model has no
  entry in the owner type registry. This usually means the registry changed
  after rows were written.

A missing owner or an anonymous actor is never an error; those surface as `None`.
"""

from __future__ import annotations

from typing import Iterable, Optional


class OwnershipError(Exception):
    """Base class for ownership failures."""


class InvalidOwnerType(OwnershipError):
    """Raised when an owner of a non-permitted type is assigned to a record."""

    def __init__(self, owner_type: str, model_label: str, allowed: Iterable[str] = ()) -> None:
        self.owner_type = owner_type
        self.model_label = model_label
        self.allowed = tuple(allowed)
        allowed_txt = ", ".join(self.allowed) or "-"
        super().__init__(
            f"Owner type '{owner_type}' is not allowed for {model_label} (allowed: {allowed_txt})."
        )


class UnregisteredOwnerType(OwnershipError, LookupError):
    """Raised when a tag or owner model is missing from the registry."""

    def __init__(self, tag: Optional[str] = None, model_label: Optional[str] = None) -> None:
        self.tag = tag
        self.model_label = model_label
        if tag is not None:
            message = f"No owner type registered under tag '{tag}'."
        else:
            message = f"Model {model_label} is not registered as an owner type."
        super().__init__(message)
