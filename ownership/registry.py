"""
Owner type registry: short string tags mapped to concrete owner models.

Overview
--------
- Polymorphic owned records store an owner as `(owner_type, owner_id)`. The tag in
  `owner_type` is resolved here to a model and a loader function that fetches the
  owner row for a given key.
- The registry is populated once at start-up by `OwnershipConfig.ready()` from
  `settings.OWNERSHIP_OWNER_TYPES` and is read-only afterwards.

Usage
-----
    owner_types.register("user", User)
    owner_types.tag_for(request.user)   # -> "user"
    owner_types.load("user", "42")      # -> User(pk=42) or None

Notes
-----
- Lookups use the *concrete* model so proxy models resolve to the same tag as
  their base table.
- Custom loaders can be supplied per tag (e.g. to `select_related` or to read
  from a manager that includes archived rows).
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple, Type, Union

from django.apps import apps
from django.core.exceptions import ImproperlyConfigured, ValidationError
from django.db import models

from .exceptions import UnregisteredOwnerType

Loader = Callable[[Any], Optional[models.Model]]


def _owner_model(owner: Any) -> Any:
    # Lazy wrappers (`request.user`) expose the wrapped model via `__class__`.
    return owner if isinstance(owner, type) else owner.__class__


def _default_loader(model: Type[models.Model]) -> Loader:
    """Build a loader that fetches `model` by primary key (None when missing or malformed)."""

    def load(key: Any) -> Optional[models.Model]:
        try:
            key = model._meta.pk.to_python(key)
        except ValidationError:
            return None
        return model._default_manager.filter(pk=key).first()

    return load


class OwnerTypeRegistry:
    """Process-wide tag -> (model, loader) map with a reverse model -> tag index."""

    def __init__(self) -> None:
        self._entries: Dict[str, Tuple[Type[models.Model], Loader]] = {}
        self._tags_by_model: Dict[Type[models.Model], str] = {}

    # ---- registration -------------------------------------------------------

    def register(
        self,
        tag: str,
        model: Union[str, Type[models.Model]],
        loader: Optional[Loader] = None,
    ) -> None:
        """
        Register `model` under `tag`.

        `model` may be a class or an "app_label.ModelName" string. Registering the
        same pair twice is a no-op; re-pointing a tag (or a model) elsewhere raises
        `ImproperlyConfigured`.
        """
        if not tag:
            raise ImproperlyConfigured("Owner type tags must be non-empty strings.")
        if isinstance(model, str):
            model = apps.get_model(model)
        model = model._meta.concrete_model

        existing = self._entries.get(tag)
        if existing is not None and existing[0] is not model:
            raise ImproperlyConfigured(
                f"Owner type tag '{tag}' is already registered for {existing[0]._meta.label}."
            )
        other_tag = self._tags_by_model.get(model)
        if other_tag is not None and other_tag != tag:
            raise ImproperlyConfigured(
                f"{model._meta.label} is already registered as owner type '{other_tag}'."
            )

        self._entries[tag] = (model, loader or _default_loader(model))
        self._tags_by_model[model] = tag

    def register_many(self, mapping: Mapping[str, Union[str, Type[models.Model]]]) -> None:
        """Register every `{tag: model}` pair of a settings-style mapping."""
        for tag, model in mapping.items():
            self.register(tag, model)

    def clear(self) -> None:
        """Forget every registration (test helper)."""
        self._entries.clear()
        self._tags_by_model.clear()

    # ---- lookups ------------------------------------------------------------

    def resolve(self, tag: str) -> Type[models.Model]:
        """Return the model registered under `tag`."""
        try:
            return self._entries[tag][0]
        except KeyError:
            raise UnregisteredOwnerType(tag=tag) from None

    def tag_for(self, owner: Union[models.Model, Type[models.Model]]) -> str:
        """Return the tag of an owner instance or owner model class."""
        model = _owner_model(owner)
        meta = getattr(model, "_meta", None)
        if meta is None:
            # e.g. AnonymousUser: not a model, never an owner
            raise UnregisteredOwnerType(model_label=model.__name__)
        try:
            return self._tags_by_model[meta.concrete_model]
        except KeyError:
            raise UnregisteredOwnerType(model_label=meta.label) from None

    def is_registered(self, owner: Union[models.Model, Type[models.Model]]) -> bool:
        model = _owner_model(owner)
        meta = getattr(model, "_meta", None)
        return meta is not None and meta.concrete_model in self._tags_by_model

    def load(self, tag: str, key: Any) -> Optional[models.Model]:
        """Fetch the owner identified by `(tag, key)`; None if the row is gone."""
        try:
            loader = self._entries[tag][1]
        except KeyError:
            raise UnregisteredOwnerType(tag=tag) from None
        return loader(key)

    def tags(self) -> Iterable[str]:
        return tuple(self._entries)

    def __contains__(self, tag: object) -> bool:
        return tag in self._entries

    def __len__(self) -> int:
        return len(self._entries)


# Single registry shared by the whole process.
owner_types = OwnerTypeRegistry()
