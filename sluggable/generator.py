"""
Slug generation: resolve the source text, normalize it, make it unique.

``SlugGenerator`` is storage-agnostic. Everything it needs to know about a
record, and whether a slug is already taken, goes through a
``SlugStorage`` (the Django ORM one by default).
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from . import transliteration
from .options import SlugOptions
from .storage import DjangoSlugStorage, SlugStorage

logger = logging.getLogger(__name__)


class SlugGenerator:
    def __init__(self, storage: Optional[SlugStorage] = None):
        self.storage = storage or DjangoSlugStorage()

    # Lifecycle hooks called by the persistence layer

    def before_create(self, record: Any) -> None:
        self.generate_on_create(record, record.get_slug_options())

    def before_update(self, record: Any) -> None:
        self.generate_on_update(record, record.get_slug_options())

    # Entry points

    def generate_on_create(self, record: Any, options: SlugOptions) -> None:
        if not options.generate_on_create:
            return
        if self._overwrite_blocked(record, options):
            return
        self.generate_slug(record, options)

    def generate_on_update(self, record: Any, options: SlugOptions) -> None:
        if not options.generate_on_update:
            return
        if self._overwrite_blocked(record, options):
            return
        self.generate_slug(record, options)

    def generate_slug(self, record: Any, options: SlugOptions) -> str:
        """
        Regenerate the slug regardless of the create/update switches and
        assign it to ``options.slug_field``.

        Raises ``InvalidOption`` before touching the record when the
        options are misconfigured.
        """
        slug = self.build_slug(record, options)
        setattr(record, options.slug_field, slug)
        return slug

    def build_slug(self, record: Any, options: SlugOptions) -> str:
        options.validate()

        slug = self.normalize(self.resolve_source_string(record, options), options)

        if options.generate_unique_slugs:
            slug = self.make_unique(slug, record, options)

        return slug

    # Source resolution

    def has_custom_slug(self, record: Any, options: SlugOptions) -> bool:
        current = self.storage.field_value(record, options.slug_field)
        if not current:
            return False
        return current != self.storage.original_field_value(record, options.slug_field)

    def resolve_source_string(self, record: Any, options: SlugOptions) -> str:
        if self.has_custom_slug(record, options):
            source = str(self.storage.field_value(record, options.slug_field))
        elif callable(options.source_fields):
            source = options.source_fields(record)
            source = "" if source is None else str(source)
        else:
            source = options.separator.join(
                str(self.storage.field_value(record, path))
                for path in options.source_fields
            )

        return transliteration.truncate(source, options.maximum_length)

    # Normalization

    def normalize(self, value: str, options: SlugOptions) -> str:
        slug = transliteration.normalize(
            value,
            options.transliteration_mode,
            options.separator,
            options.language,
        )
        return self._fit(slug, options.maximum_length, options.separator)

    # Uniqueness

    def make_unique(self, slug: str, record: Any, options: SlugOptions) -> str:
        if not options.generate_unique_slugs:
            return slug

        original_slug = slug
        i = 1

        while slug == "" or self.other_record_exists_with_slug(slug, record, options):
            logger.debug(f"Slug {slug!r} unavailable for {type(record).__name__}")
            slug = self._suffixed(original_slug, i, options)
            i += 1

        return slug

    def other_record_exists_with_slug(
        self, slug: str, record: Any, options: SlugOptions
    ) -> bool:
        model = type(record)
        exclude_key = (
            self.storage.identity_key(record) if self.storage.exists(record) else None
        )
        return self.storage.query_exists_with_slug(
            model,
            options.slug_field,
            slug,
            exclude_key=exclude_key,
            include_soft_deleted=self.storage.supports_soft_delete(model),
            extra_filter=options.extra_scope_filter,
        )

    # Helpers

    def _overwrite_blocked(self, record: Any, options: SlugOptions) -> bool:
        if options.overwrite_protected and self.storage.field_value(
            record, options.slug_field
        ):
            logger.debug(
                f"Keeping existing {options.slug_field} on {type(record).__name__}"
            )
            return True
        return False

    @staticmethod
    def _fit(slug: str, maximum_length: int, separator: str) -> str:
        if len(slug) <= maximum_length:
            return slug
        slug = slug[:maximum_length]
        while separator and slug.endswith(separator):
            slug = slug[: -len(separator)]
        return slug

    def _suffixed(self, base: str, i: int, options: SlugOptions) -> str:
        suffix = str(i)
        if not base:
            return suffix

        room = options.maximum_length - len(options.separator) - len(suffix)
        if len(base) > room:
            base = self._fit(base, max(room, 0), options.separator)
            if not base:
                return suffix

        return f"{base}{options.separator}{suffix}"
