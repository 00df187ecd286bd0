from .exceptions import (
    InvalidMaximumLength,
    InvalidOption,
    MissingSlugField,
    MissingSourceFields,
)
from .generator import SlugGenerator
from .options import SlugOptions, TransliterationMode

__all__ = [
    "InvalidMaximumLength",
    "InvalidOption",
    "MissingSlugField",
    "MissingSourceFields",
    "SlugGenerator",
    "SlugOptions",
    "TransliterationMode",
]
