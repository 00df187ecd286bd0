from __future__ import annotations

from typing import Optional, Type

from django.db import models

from .generator import SlugGenerator
from .options import SlugOptions


def unique_slug(
    model: Type[models.Model],
    value: str,
    slug_field: str = "slug",
    separator: str = "-",
    maximum_length: Optional[int] = None,
) -> str:
    """
    Generate a slug for ``value`` that is unique for ``model``.

    Meant for importers and scripts that create rows without going through
    ``HasSlug``. The length defaults to the slug column's ``max_length``.
    """
    if maximum_length is None:
        maximum_length = model._meta.get_field(slug_field).max_length or 50

    options = (
        SlugOptions.create()
        .generate_slugs_from(lambda record: value)
        .save_slugs_to(slug_field)
        .using_separator(separator)
        .slugs_should_be_no_longer_than(maximum_length)
    )
    return SlugGenerator().build_slug(model(), options)
