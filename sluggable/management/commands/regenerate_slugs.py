"""
Management command to rebuild slugs for every row of a model.

Ignores the create/update switches and preventOverwrite: each row's slug is
derived again from its source fields and made unique.

Usage:
    python manage.py regenerate_slugs blog.Post             # Rewrite changed slugs
    python manage.py regenerate_slugs blog.Post --dry-run   # Preview without changes
"""
from __future__ import annotations

import logging

from django.apps import apps
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from sluggable.models import HasSlug

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Regenerate slugs for all rows of a model using HasSlug."

    def add_arguments(self, parser):
        parser.add_argument("model", help="Model label, e.g. blog.Post")
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Preview changes without making them.",
        )

    def handle(self, *args, **options):
        label = options["model"]
        dry_run = options["dry_run"]

        try:
            model = apps.get_model(label)
        except (LookupError, ValueError) as e:
            raise CommandError(f"Unknown model {label!r}: {e}")

        if not issubclass(model, HasSlug):
            raise CommandError(f"{label} does not use HasSlug")

        if dry_run:
            self.stdout.write(self.style.WARNING("DRY RUN - no changes will be made"))

        changed = 0
        total = 0
        for record in list(model._base_manager.order_by("pk")):
            total += 1
            slug_options = record.get_slug_options()
            old_slug = getattr(record, slug_options.slug_field)
            new_slug = record.generate_slug()

            if new_slug == old_slug:
                continue

            changed += 1
            if dry_run:
                self.stdout.write(f"Would change {record.pk}: {old_slug} -> {new_slug}")
                continue

            with transaction.atomic():
                model._base_manager.filter(pk=record.pk).update(
                    **{slug_options.slug_field: new_slug}
                )
            logger.info(f"Regenerated slug for {label} {record.pk}: {old_slug} -> {new_slug}")

        if dry_run:
            self.stdout.write(f"Would regenerate {changed} of {total} slugs")
        else:
            self.stdout.write(
                self.style.SUCCESS(f"Regenerated {changed} of {total} slugs")
            )
