"""
Text to slug normalization.

Two pipelines are available:

* ``default_slug`` runs python-slugify with the language table and ``@``
  as replacements, folding everything to ASCII.
* ``arabic_slug`` keeps Arabic letters verbatim, slugifies the Latin text
  around them and maps Latin/Romanian diacritics through a fixed table.

Character tables are plain dicts kept in a registry so new languages or
scripts can be added with ``register_transliteration_table`` without
touching the pipelines.
"""
from __future__ import annotations

import re
from typing import Dict, Optional

from slugify import slugify

from .options import TransliterationMode

ARABIC_LETTERS = "ءاأإآؤئبتثجحخدذرزسشصضطظعغفقكلمنهويةى"

# Latin and Romanian diacritics used by the Arabic-aware pipeline
LATIN_DIACRITICS = {
    "Š": "S", "š": "s", "Ð": "Dj", "Ž": "Z", "ž": "z", "À": "A", "Á": "A",
    "Â": "A", "Ã": "A", "Ä": "A", "Å": "A", "Æ": "A", "Ç": "C", "È": "E",
    "É": "E", "Ê": "E", "Ë": "E", "Ì": "I", "Í": "I", "Î": "I", "Ï": "I",
    "Ñ": "N", "Ń": "N", "Ò": "O", "Ó": "O", "Ô": "O", "Õ": "O", "Ö": "O",
    "Ø": "O", "Ù": "U", "Ú": "U", "Û": "U", "Ü": "U", "Ý": "Y", "Þ": "B",
    "ß": "ss", "à": "a", "á": "a", "â": "a", "ã": "a", "ä": "a", "å": "a",
    "æ": "a", "ç": "c", "è": "e", "é": "e", "ê": "e", "ë": "e", "ì": "i",
    "í": "i", "î": "i", "ï": "i", "ð": "o", "ñ": "n", "ń": "n", "ò": "o",
    "ó": "o", "ô": "o", "õ": "o", "ö": "o", "ø": "o", "ù": "u", "ú": "u",
    "û": "u", "ü": "u", "ý": "y", "þ": "b", "ÿ": "y", "ƒ": "f", "/": "",
    "€": "eur",
    # Romanian
    "ă": "a", "ș": "s", "ț": "t", "Ă": "A", "Ș": "S", "Ț": "T",
}

# Applied before ASCII folding where the generic folding is wrong for a language
LANGUAGE_TABLES = {
    "de": {
        "ä": "ae", "ö": "oe", "ü": "ue", "Ä": "Ae", "Ö": "Oe", "Ü": "Ue",
    },
    "da": {
        "æ": "ae", "ø": "oe", "å": "aa", "Æ": "Ae", "Ø": "Oe", "Å": "Aa",
    },
    "bg": {
        "щ": "sht", "Щ": "Sht", "ъ": "a", "Ъ": "A", "ь": "y", "Ь": "Y",
        "ю": "yu", "Ю": "Yu", "я": "ya", "Я": "Ya",
    },
}

_TABLES: Dict[str, Dict[str, str]] = {}


def register_transliteration_table(name: str, table: Dict[str, str]) -> None:
    """
    Register (or replace) a character table under ``name``.

    Language codes are looked up by ``default_slug``; the ``arabic`` entry
    is used by ``arabic_slug``.
    """
    _TABLES[name] = dict(table)


def get_transliteration_table(name: str) -> Optional[Dict[str, str]]:
    return _TABLES.get(name)


register_transliteration_table(TransliterationMode.ARABIC.value, LATIN_DIACRITICS)
for _language, _table in LANGUAGE_TABLES.items():
    register_transliteration_table(_language, _table)


def truncate(value: str, maximum_length: int) -> str:
    """Cut ``value`` to ``maximum_length`` codepoints."""
    return value[:maximum_length]


def default_slug(value: Optional[str], separator: str = "-", language: str = "en") -> str:
    if not value:
        return ""

    # Underscores and hyphens are both word breaks for slugify, so either
    # becomes the chosen separator
    replacements = list((get_transliteration_table(language) or {}).items())
    replacements.append(("@", " at "))
    return slugify(value, separator=separator, replacements=replacements)


def arabic_slug(value: Optional[str], separator: str = "-") -> str:
    if value is None:
        return ""

    value = value.strip().lower()
    value = value.translate(
        str.maketrans(get_transliteration_table(TransliterationMode.ARABIC.value))
    )
    value = re.sub(rf"[^a-z0-9_\s{ARABIC_LETTERS}]", "", value)
    value = re.sub(r"[\s-]+", " ", value)
    value = re.sub(r"[\s_]", lambda _: separator, value)
    return value


def normalize(
    value: Optional[str],
    mode: TransliterationMode = TransliterationMode.DEFAULT,
    separator: str = "-",
    language: str = "en",
) -> str:
    if mode == TransliterationMode.ARABIC:
        return arabic_slug(value, separator)
    return default_slug(value, separator, language)
