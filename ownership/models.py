from __future__ import annotations

"""
Ownership mixins and owner-scoped query helpers.

This module provides:
- `OwnedQuerySet`: `where_owned_by`, `where_not_owned_by`, `where_owned_by_any`
  and `for_actor` scopes, available on every owned model's default manager.
- `OwnershipMixin`: the instance operations (`get_owner`, `has_owner`,
  `is_owned_by`, `change_owner_to`, `abandon_owner`, `with_default_owner`, ...).
- Two abstract storage flavours:
    * `HasMorphOwner`: polymorphic owner stored as `owner_type` + `owner_id`
      and resolved through `ownership.registry.owner_types`.
    * `HasOwner`: single-type owner stored as a nullable FK (`owner`) to
      `AUTH_USER_MODEL`.

Declaring an owned model
------------------------
    class Asset(HasMorphOwner):
        allowed_owner_types = ("user", "team")   # empty -> any registered type
        default_owner_on_create = True           # inject current actor on insert

Invariants
----------
- `owner_type` and `owner_id` are written together: both null or both set. A
  database check constraint backs this up for rows written outside the mixin.
- Default-owner injection runs only when a row is inserted (see `ownership.hooks`).
  The pending `with_default_owner()` / `without_default_owner()` request lives on
  the instance and is cleared once the insert consumes it.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from .actor import get_current_actor, normalize_actor
from .exceptions import InvalidOwnerType, UnregisteredOwnerType
from .logging import describe_owner
from .registry import owner_types

logger = logging.getLogger(__name__)
# One INFO line per owner transition.
changes_logger = logging.getLogger("ownership.changes")

OwnerReference = Tuple[str, str]


@dataclass
class PendingDefaultOwner:
    """Per-instance request made by `with_default_owner()` / `without_default_owner()`."""
    enabled: bool
    owner: Optional[models.Model] = None


class OwnedQuerySet(models.QuerySet):
    """
    Owner scopes for owned models.

        Asset.objects.where_owned_by(user)
        Asset.objects.where_not_owned_by(user)   # includes unowned rows
        Asset.objects.for_actor(request.user)    # none() for anonymous
    """

    def where_owned_by(self, owner):
        """Rows whose owner reference matches `owner` exactly."""
        if owner is None:
            return self.none()
        return self.filter(self.model.owner_q(owner))

    def where_not_owned_by(self, owner):
        """Rows not owned by `owner`; unowned rows count as not owned by anyone."""
        if owner is None:
            return self.all()
        return self.filter(~self.model.owner_q(owner) | self.model.unowned_q())

    def where_owned_by_any(self, owners: Iterable[Any]):
        """Rows owned by at least one of `owners`."""
        query = Q(pk__in=[])
        for owner in owners:
            if owner is not None:
                query |= self.model.owner_q(owner)
        return self.filter(query)

    def for_actor(self, actor):
        """Rows owned by `actor`, or an empty queryset when nobody is acting."""
        actor = normalize_actor(actor)
        if actor is None:
            return self.none()
        return self.where_owned_by(actor)


class OwnershipMixin:
    """
    Owner operations shared by both storage flavours.

    Subclasses supply the storage hooks: `owner_fields`, `_owner_reference()`,
    `_reference_for()`, `_load_owner()`, `_write_owner()`, `check_owner_type()`,
    `owner_q()` and `unowned_q()`.
    """

    allowed_owner_types: Tuple[str, ...] = ()
    default_owner_on_create: bool = False

    owner_fields: Tuple[str, ...] = ()
    _pending_default_owner: Optional[PendingDefaultOwner] = None

    # ---- reads --------------------------------------------------------------

    def get_owner(self):
        """Return the owner instance, or None when the record is unowned."""
        ref = self._owner_reference()
        if ref is None:
            return None
        cached = self.__dict__.get("_owner_cache")
        if cached is not None and cached[0] == ref:
            return cached[1]
        owner = self._load_owner(ref)
        self._owner_cache = (ref, owner)
        return owner

    def has_owner(self) -> bool:
        return self._owner_reference() is not None

    def is_owned_by(self, candidate) -> bool:
        """True iff the stored reference matches the candidate's type and key."""
        if candidate is None or getattr(candidate, "pk", None) is None:
            return False
        ref = self._owner_reference()
        return ref is not None and ref == self._reference_for(candidate)

    def is_not_owned_by(self, candidate) -> bool:
        return not self.is_owned_by(candidate)

    @classmethod
    def can_be_owned_by(cls, candidate) -> bool:
        """True when `candidate`'s type passes this model's allow-list."""
        try:
            cls.check_owner_type(candidate)
        except (InvalidOwnerType, UnregisteredOwnerType):
            return False
        return True

    # ---- writes -------------------------------------------------------------

    def change_owner_to(self, new_owner) -> None:
        """
        Validate `new_owner` against the allow-list, then store and persist it.

        Raises:
            InvalidOwnerType: the owner's type is not permitted for this model.
            UnregisteredOwnerType: the owner's model has no registered tag.
        """
        self.check_owner_type(new_owner)
        previous = self._owner_reference()
        self._write_owner(new_owner)
        self._persist_owner()
        changes_logger.info(
            "owner changed",
            extra={
                "record": f"{self._meta.label}:{self.pk}",
                "previous": ":".join(previous) if previous else "-",
                "owner": describe_owner(new_owner),
            },
        )

    def abandon_owner(self) -> None:
        """Clear the owner reference and persist."""
        previous = self._owner_reference()
        self._write_owner(None)
        self._persist_owner()
        changes_logger.info(
            "owner abandoned",
            extra={
                "record": f"{self._meta.label}:{self.pk}",
                "previous": ":".join(previous) if previous else "-",
                "owner": "-",
            },
        )

    def with_default_owner(self, owner=None):
        """Request a default owner (or the current actor) for the next insert."""
        self._pending_default_owner = PendingDefaultOwner(enabled=True, owner=owner)
        return self

    def without_default_owner(self):
        """Suppress default-owner injection for the next insert."""
        self._pending_default_owner = PendingDefaultOwner(enabled=False)
        return self

    def apply_default_owner(self) -> None:
        """
        Consume the pending default-owner request. Called by the pre-save hook
        when the row is inserted.

        An explicit owner is validated (and may raise `InvalidOwnerType`). The
        current actor is used only when it can own this model; otherwise the row
        is stored unowned.
        """
        pending, self._pending_default_owner = self._pending_default_owner, None
        enabled = pending.enabled if pending is not None else self.default_owner_on_create
        if not enabled or self.has_owner():
            return

        if pending is not None and pending.owner is not None:
            owner = pending.owner
            self.check_owner_type(owner)
        else:
            owner = get_current_actor()
            if owner is None:
                logger.debug("No current actor; %s stored without owner.", self._meta.label)
                return
            try:
                self.check_owner_type(owner)
            except (InvalidOwnerType, UnregisteredOwnerType) as exc:
                logger.debug("Current actor cannot own %s: %s", self._meta.label, exc)
                return

        self._write_owner(owner)
        changes_logger.info(
            "default owner assigned",
            extra={
                "record": f"{self._meta.label}:new",
                "previous": "-",
                "owner": describe_owner(owner),
            },
        )

    def _persist_owner(self) -> None:
        if self._state.adding:
            self.save()
            return
        touched = [f.name for f in self._meta.concrete_fields if getattr(f, "auto_now", False)]
        self.save(update_fields=[*self.owner_fields, *touched])

    @staticmethod
    def _require_saved(owner) -> None:
        if owner is not None and owner.pk is None:
            raise ValueError(f"Cannot use an unsaved {owner.__class__.__name__} as an owner.")


class HasMorphOwner(OwnershipMixin, models.Model):
    """
    Abstract base for records owned by any registered owner type.

    Fields:
        owner_type: registry tag of the owner's model (e.g. "user").
        owner_id: the owner's primary key, stored as text so integer and UUID
            keys share one column.
    """

    owner_type = models.CharField(max_length=64, null=True, blank=True)
    owner_id = models.CharField(max_length=64, null=True, blank=True)

    objects = OwnedQuerySet.as_manager()

    owner_fields = ("owner_type", "owner_id")

    class Meta:
        abstract = True
        constraints = [
            models.CheckConstraint(
                name="%(app_label)s_%(class)s_owner_pair",
                condition=(
                    Q(owner_type__isnull=True, owner_id__isnull=True)
                    | Q(owner_type__isnull=False, owner_id__isnull=False)
                ),
            )
        ]

    # ---- storage hooks ------------------------------------------------------

    def _owner_reference(self) -> Optional[OwnerReference]:
        if self.owner_id is None:
            return None
        return (self.owner_type, str(self.owner_id))

    def _reference_for(self, owner) -> OwnerReference:
        return (owner_types.tag_for(owner), str(owner.pk))

    def _load_owner(self, ref: OwnerReference):
        tag, key = ref
        return owner_types.load(tag, key)

    def _write_owner(self, owner) -> None:
        self._require_saved(owner)
        if owner is None:
            self.owner_type = None
            self.owner_id = None
            self.__dict__.pop("_owner_cache", None)
            return
        ref = self._reference_for(owner)
        self.owner_type, self.owner_id = ref
        self._owner_cache = (ref, owner)

    @classmethod
    def check_owner_type(cls, owner) -> str:
        """Return the owner's tag, or raise if it may not own this model."""
        tag = owner_types.tag_for(owner)
        if cls.allowed_owner_types and tag not in cls.allowed_owner_types:
            raise InvalidOwnerType(tag, cls._meta.label, cls.allowed_owner_types)
        return tag

    @classmethod
    def owner_q(cls, owner) -> Q:
        tag = owner_types.tag_for(owner)
        if owner.pk is None:
            return Q(pk__in=[])
        return Q(owner_type=tag, owner_id=str(owner.pk))

    @classmethod
    def unowned_q(cls) -> Q:
        return Q(owner_id__isnull=True)

    def clean(self):
        """Validate the pair invariant and the allow-list for form/serializer writes."""
        super().clean()
        if (self.owner_type is None) != (self.owner_id is None):
            raise ValidationError("owner_type and owner_id must be set together.")
        if self.owner_type is not None:
            if self.owner_type not in owner_types:
                raise ValidationError({"owner_type": f"Unknown owner type '{self.owner_type}'."})
            if self.allowed_owner_types and self.owner_type not in self.allowed_owner_types:
                raise ValidationError({"owner_type": f"Owner type '{self.owner_type}' is not allowed."})


class HasOwner(OwnershipMixin, models.Model):
    """
    Abstract base for records owned by a user (single owner type).

    The allow-list is implicitly the FK's target model; assigning anything else
    raises `InvalidOwnerType`. Deleting the owner leaves the record unowned.
    """

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="%(app_label)s_%(class)s_owned",
    )

    objects = OwnedQuerySet.as_manager()

    owner_fields = ("owner",)

    class Meta:
        abstract = True

    @classmethod
    def owner_model(cls):
        return cls._meta.get_field("owner").related_model

    # ---- storage hooks ------------------------------------------------------

    def _owner_reference(self) -> Optional[OwnerReference]:
        if self.owner_id is None:
            return None
        return (self.owner_model()._meta.label, str(self.owner_id))

    def _reference_for(self, owner) -> Optional[OwnerReference]:
        if not isinstance(owner, self.owner_model()):
            return None
        return (self.owner_model()._meta.label, str(owner.pk))

    def _load_owner(self, ref: OwnerReference):
        return self.owner

    def _write_owner(self, owner) -> None:
        self._require_saved(owner)
        self.owner = owner

    @classmethod
    def check_owner_type(cls, owner) -> str:
        model = cls.owner_model()
        if isinstance(owner, model):
            return owner_types.tag_for(model) if owner_types.is_registered(model) else model._meta.label
        given = owner_types.tag_for(owner) if owner_types.is_registered(owner) else owner.__class__.__name__
        allowed = owner_types.tag_for(model) if owner_types.is_registered(model) else model._meta.label
        raise InvalidOwnerType(given, cls._meta.label, (allowed,))

    @classmethod
    def owner_q(cls, owner) -> Q:
        if not isinstance(owner, cls.owner_model()) or owner.pk is None:
            return Q(pk__in=[])
        return Q(owner=owner)

    @classmethod
    def unowned_q(cls) -> Q:
        return Q(owner__isnull=True)
