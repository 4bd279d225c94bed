"""
django-filter integration for owned-record list endpoints.

`OwnerTypeFilterSet` adds two query parameters to any owned model's list view:

- `?owner_type=team`      restrict to rows owned by a given registered type.
- `?unowned=true|false`   restrict to rows with / without an owner reference.

Subclass it with a `Meta.model` (and extra fields) per resource.
"""

from __future__ import annotations

import django_filters

from .registry import owner_types


class OwnerTypeFilterSet(django_filters.FilterSet):
    owner_type = django_filters.CharFilter(method="filter_owner_type")
    unowned = django_filters.BooleanFilter(method="filter_unowned")

    def filter_owner_type(self, queryset, name, value):
        if not value:
            return queryset
        if value not in owner_types:
            return queryset.none()
        model = queryset.model
        if "owner_type" in model.owner_fields:
            return queryset.filter(owner_type=value)
        # Single-type models: every owned row has the FK target's type.
        if owner_types.resolve(value) is model.owner_model()._meta.concrete_model:
            return queryset.filter(owner__isnull=False)
        return queryset.none()

    def filter_unowned(self, queryset, name, value):
        if value is None:
            return queryset
        unowned = queryset.model.unowned_q()
        return queryset.filter(unowned) if value else queryset.exclude(unowned)
