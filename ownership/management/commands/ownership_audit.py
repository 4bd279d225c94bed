from __future__ import annotations

"""
Audit stored owner references for configuration drift.

Overview
--------
- Scans every installed polymorphic owned model (`HasMorphOwner`).
- Reports rows whose `owner_type` tag is no longer registered (registry changed
  after data was written) and rows whose owner row no longer exists (owners are
  not cascaded).
- With `--abandon-dangling`, clears references to missing owner rows. Rows with
  unregistered tags are only reported; fixing them needs a registry decision.

Usage
-----
    python manage.py ownership_audit
    python manage.py ownership_audit --abandon-dangling
"""

from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand

from ownership.hooks import owned_models
from ownership.registry import owner_types


class Command(BaseCommand):
    """Django management command reporting unregistered and dangling owner references."""
    help = "Report owned rows with unregistered owner types or missing owners."

    def add_arguments(self, parser):
        parser.add_argument(
            "--abandon-dangling",
            action="store_true",
            default=False,
            help="Clear owner references that point at rows which no longer exist.",
        )

    def handle(self, *args, **options):
        """
        Execute the audit.

        Steps:
            1) For each morph-owned model, group owned rows by stored tag.
            2) Unknown tags are counted as unregistered.
            3) Known tags: compare stored keys with existing owner keys.
        """
        total_unregistered = 0
        total_dangling = 0

        for model in owned_models():
            if "owner_type" not in model.owner_fields:
                continue
            owned = model._default_manager.filter(owner_id__isnull=False)
            tags = owned.order_by().values_list("owner_type", flat=True).distinct()
            for tag in tags:
                rows = owned.filter(owner_type=tag)
                if tag not in owner_types:
                    count = rows.count()
                    total_unregistered += count
                    self.stdout.write(self.style.WARNING(
                        f"{model._meta.label}: {count} row(s) with unregistered owner type '{tag}'."
                    ))
                    continue

                owner_model = owner_types.resolve(tag)
                missing = self.missing_keys(owner_model, set(rows.values_list("owner_id", flat=True)))
                if not missing:
                    continue
                dangling = rows.filter(owner_id__in=missing)
                count = dangling.count()
                total_dangling += count
                self.stdout.write(self.style.WARNING(
                    f"{model._meta.label}: {count} row(s) owned by missing '{tag}' owners."
                ))
                if options["abandon_dangling"]:
                    dangling.update(owner_type=None, owner_id=None)

        verb = "Abandoned" if options["abandon_dangling"] else "Found"
        self.stdout.write(self.style.SUCCESS(
            f"Unregistered: {total_unregistered}. {verb} dangling: {total_dangling}."
        ))

    @staticmethod
    def missing_keys(owner_model, stored_keys):
        """
        Stored keys with no matching owner row. Keys the owner's primary key
        field cannot parse (e.g. "abc" for an integer key) count as missing.
        """
        pk_field = owner_model._meta.pk
        parsed = {}
        malformed = set()
        for key in stored_keys:
            try:
                parsed[key] = pk_field.to_python(key)
            except ValidationError:
                malformed.add(key)
        existing = set(
            owner_model._default_manager.filter(pk__in=list(parsed.values())).values_list("pk", flat=True)
        )
        return malformed | {key for key, pk in parsed.items() if pk not in existing}
