from django.test import SimpleTestCase

from sluggable.options import TransliterationMode
from sluggable.transliteration import (
    LANGUAGE_TABLES,
    arabic_slug,
    default_slug,
    get_transliteration_table,
    normalize,
    register_transliteration_table,
    truncate,
)


class DefaultSlugTests(SimpleTestCase):
    def test_lowercases_and_joins_words(self):
        self.assertEqual(default_slug("Hello World"), "hello-world")

    def test_collapses_and_trims_separators(self):
        self.assertEqual(default_slug("  Hello -- World!  "), "hello-world")

    def test_folds_diacritics(self):
        self.assertEqual(default_slug("Café Crème"), "cafe-creme")

    def test_transliterates_cyrillic(self):
        self.assertEqual(default_slug("Привет мир"), "privet-mir")

    def test_underscores_become_separator(self):
        self.assertEqual(default_slug("snake_case title"), "snake-case-title")

    def test_custom_separator(self):
        self.assertEqual(default_slug("Hello World-Again", "_"), "hello_world_again")

    def test_backslash_separator(self):
        self.assertEqual(default_slug("Hello World", "\\"), "hello\\world")

    def test_at_sign_is_spelled_out(self):
        self.assertEqual(default_slug("foo@bar"), "foo-at-bar")

    def test_language_table(self):
        self.assertEqual(default_slug("Über Größe", language="de"), "ueber-groesse")
        self.assertEqual(default_slug("Über", language="en"), "uber")

    def test_empty_values(self):
        self.assertEqual(default_slug(None), "")
        self.assertEqual(default_slug(""), "")
        self.assertEqual(default_slug("!!!"), "")


class ArabicSlugTests(SimpleTestCase):
    def test_keeps_arabic_letters(self):
        self.assertEqual(arabic_slug("Ahlan وسهلا!", "-"), "ahlan-وسهلا")

    def test_none_is_empty(self):
        self.assertEqual(arabic_slug(None), "")

    def test_maps_latin_diacritics(self):
        self.assertEqual(arabic_slug("Café Olé"), "cafe-ole")
        self.assertEqual(arabic_slug("Straße"), "strasse")
        self.assertEqual(arabic_slug("€100"), "eur100")

    def test_maps_romanian_diacritics(self):
        self.assertEqual(arabic_slug("Țară Șes"), "tara-ses")

    def test_whitespace_hyphens_and_underscores(self):
        self.assertEqual(arabic_slug("  foo -- bar_baz  "), "foo-bar-baz")
        self.assertEqual(arabic_slug("foo bar", "_"), "foo_bar")
        self.assertEqual(arabic_slug("foo bar_baz", "\\"), "foo\\bar\\baz")

    def test_strips_other_scripts_and_punctuation(self):
        self.assertEqual(arabic_slug("مرحبا, world? 😀"), "مرحبا-world-")


class RegistryTests(SimpleTestCase):
    def tearDown(self):
        register_transliteration_table("de", LANGUAGE_TABLES["de"])

    def test_registered_table_is_used(self):
        register_transliteration_table("de", {"ü": "uu"})
        self.assertEqual(default_slug("Müller", language="de"), "muuller")

    def test_unknown_language_has_no_table(self):
        self.assertIsNone(get_transliteration_table("xx"))
        self.assertEqual(default_slug("Müller", language="xx"), "muller")


class NormalizeTests(SimpleTestCase):
    def test_dispatches_on_mode(self):
        self.assertEqual(normalize("Ahlan وسهلا", TransliterationMode.ARABIC), "ahlan-وسهلا")
        self.assertEqual(normalize("Ahlan World", TransliterationMode.DEFAULT), "ahlan-world")

    def test_truncate_counts_codepoints(self):
        self.assertEqual(truncate("وسهلا", 3), "وسه")
        self.assertEqual(truncate("abc", 10), "abc")
