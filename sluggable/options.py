"""
Per-model slug configuration.

Models return a ``SlugOptions`` from ``get_slug_options()``. Defaults for
separator, maximum length and language come from Django settings so a
project can change them in one place.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Sequence, Union

from django.conf import settings

from .exceptions import InvalidOption

SourceFields = Union[Sequence[str], Callable[[Any], str]]

DEFAULT_SEPARATOR = "-"
DEFAULT_MAXIMUM_LENGTH = 250
DEFAULT_LANGUAGE = "en"


class TransliterationMode(str, Enum):
    DEFAULT = "default"
    ARABIC = "arabic"


@dataclass
class SlugOptions:
    source_fields: SourceFields = field(default_factory=list)
    slug_field: str = ""
    separator: str = DEFAULT_SEPARATOR
    maximum_length: int = DEFAULT_MAXIMUM_LENGTH
    generate_on_create: bool = True
    generate_on_update: bool = True
    overwrite_protected: bool = False
    generate_unique_slugs: bool = True
    transliteration_mode: TransliterationMode = TransliterationMode.DEFAULT
    language: str = DEFAULT_LANGUAGE
    extra_scope_filter: Optional[Any] = None

    @classmethod
    def create(cls) -> SlugOptions:
        """
        Start a new option set seeded from the ``SLUGGABLE_*`` settings.
        """
        return cls(
            separator=getattr(settings, "SLUGGABLE_SEPARATOR", DEFAULT_SEPARATOR),
            maximum_length=getattr(
                settings, "SLUGGABLE_MAXIMUM_LENGTH", DEFAULT_MAXIMUM_LENGTH
            ),
            language=getattr(settings, "SLUGGABLE_LANGUAGE", DEFAULT_LANGUAGE),
        )

    def generate_slugs_from(self, *fields) -> SlugOptions:
        """
        Accept field paths (``"title"``, ``"author.name"``), a list of
        them, or a single callable receiving the record.
        """
        if len(fields) == 1 and callable(fields[0]):
            self.source_fields = fields[0]
        elif len(fields) == 1 and isinstance(fields[0], (list, tuple)):
            self.source_fields = list(fields[0])
        else:
            self.source_fields = list(fields)
        return self

    def save_slugs_to(self, field_name: str) -> SlugOptions:
        self.slug_field = field_name
        return self

    def allow_duplicate_slugs(self) -> SlugOptions:
        self.generate_unique_slugs = False
        return self

    def slugs_should_be_no_longer_than(self, maximum_length: int) -> SlugOptions:
        self.maximum_length = maximum_length
        return self

    def using_separator(self, separator: str) -> SlugOptions:
        self.separator = separator
        return self

    def using_language(self, language: str) -> SlugOptions:
        self.language = language
        return self

    def do_not_generate_slugs_on_create(self) -> SlugOptions:
        self.generate_on_create = False
        return self

    def do_not_generate_slugs_on_update(self) -> SlugOptions:
        self.generate_on_update = False
        return self

    def prevent_overwrite(self) -> SlugOptions:
        self.overwrite_protected = True
        return self

    def arabicable(self) -> SlugOptions:
        self.transliteration_mode = TransliterationMode.ARABIC
        return self

    def extra_scope(self, scope) -> SlugOptions:
        # Q object, lookup dict, or callable(queryset) -> queryset
        self.extra_scope_filter = scope
        return self

    def validate(self) -> None:
        if not callable(self.source_fields) and not len(self.source_fields):
            raise InvalidOption.missing_from_field()

        if not self.slug_field:
            raise InvalidOption.missing_slug_field()

        if self.maximum_length <= 0:
            raise InvalidOption.invalid_maximum_length()
