from __future__ import annotations

import unittest

import pandas as pd

from DEXBRIDGE.app.utils.services.text.normalization import (
    coerce_text,
    collapse_vowel_runs,
    contains_latin,
    contains_secondary_script,
    normalize,
    normalized_variants,
    romaji_tolerance_variants,
)
from catalog_fixtures import BaselineOnlyTransliterator, FixedRomajiTransliterator


class NormalizationTests(unittest.TestCase):
    # ------------------------------------------------------------------
    def test_coerce_text_strips_and_handles_missing_values(self) -> None:
        self.assertEqual(coerce_text("  Pika chu  "), "Pika chu")
        self.assertIsNone(coerce_text("   "))
        self.assertIsNone(coerce_text(pd.NA))
        self.assertIsNone(coerce_text(float("nan")))
        self.assertEqual(coerce_text(25), "25")

    # ------------------------------------------------------------------
    def test_normalize_folds_width_and_case(self) -> None:
        self.assertEqual(normalize("ＰＩＫＡ"), "pika")
        self.assertEqual(normalize("ＰＩＫＡ"), normalize("pika"))

    # ------------------------------------------------------------------
    def test_normalize_removes_separators(self) -> None:
        self.assertEqual(normalize("  Mr. Mime "), "mrmime")
        self.assertEqual(normalize("Farfetch'd"), "farfetchd")
        self.assertEqual(normalize("ho_oh"), "hooh")
        self.assertEqual(normalize("ポケモン・ゲット！"), "ぽけもんげつと")

    # ------------------------------------------------------------------
    def test_normalize_returns_empty_for_blank_input(self) -> None:
        self.assertEqual(normalize(""), "")
        self.assertEqual(normalize("   \t "), "")
        self.assertEqual(normalize("!?"), "")

    # ------------------------------------------------------------------
    def test_normalize_folds_kana(self) -> None:
        self.assertEqual(normalize("ピカチュウ"), "ぴかちゆう")
        self.assertEqual(normalize("ぴかちゅう"), "ぴかちゆう")
        self.assertEqual(normalize("ﾋﾟｶﾁｭｳ"), "ぴかちゆう")

    # ------------------------------------------------------------------
    def test_normalize_drops_prolonged_sound_mark(self) -> None:
        self.assertEqual(normalize("リザードン"), "りざどん")
        self.assertEqual(normalize("ミュウツー"), "みゆうつ")

    # ------------------------------------------------------------------
    def test_normalize_composes_marks_split_by_separators(self) -> None:
        self.assertEqual(normalize("e-\u0301"), "\u00e9")
        self.assertEqual(normalize("か・\u3099"), "が")
        self.assertEqual(normalize("eー\u0301"), "\u00e9")
        self.assertEqual(normalize("Poke\u0301-\u0301mon"), normalize("Poke\u0301\u0301mon"))

    # ------------------------------------------------------------------
    def test_normalize_is_idempotent(self) -> None:
        samples = [
            "ＰＩＫＡ",
            "ピカチュウ",
            "ﾋﾟｶﾁｭｳ",
            "リザードン",
            "Mr. Mime",
            "pokémon",
            "e-\u0301",
            "ｶﾞ・\u3099",
            "eー\u0301",
            "か・\u3099",
            "  ",
            "",
        ]
        for sample in samples:
            once = normalize(sample)
            self.assertEqual(normalize(once), once, sample)

    # ------------------------------------------------------------------
    def test_script_detection_helpers(self) -> None:
        self.assertTrue(contains_secondary_script("ピカ"))
        self.assertTrue(contains_secondary_script("大好き"))
        self.assertTrue(contains_secondary_script("ー"))
        self.assertFalse(contains_secondary_script("pika"))
        self.assertTrue(contains_latin("ピカ chu"))
        self.assertFalse(contains_latin("ピカチュウ"))
        self.assertFalse(contains_latin(""))


class RomajiToleranceTests(unittest.TestCase):
    # ------------------------------------------------------------------
    def test_collapse_vowel_runs(self) -> None:
        self.assertEqual(collapse_vowel_runs("rizaadon"), "rizadon")
        self.assertEqual(collapse_vowel_runs("myuutsuu"), "myutsu")
        self.assertEqual(collapse_vowel_runs("kameeru"), "kameru")

    # ------------------------------------------------------------------
    def test_tolerance_variants_collapse_long_vowels(self) -> None:
        self.assertEqual(
            romaji_tolerance_variants("Pikachuu"),
            {"pikachuu", "pikachu"},
        )
        self.assertEqual(
            romaji_tolerance_variants("Rizaadon"),
            {"rizaadon", "rizadon"},
        )

    # ------------------------------------------------------------------
    def test_tolerance_variants_rewrite_hard_c(self) -> None:
        self.assertEqual(romaji_tolerance_variants("Cabigon"), {"cabigon", "kabigon"})
        self.assertEqual(romaji_tolerance_variants("Coca"), {"coca", "koka"})
        self.assertEqual(romaji_tolerance_variants("cute"), {"cute", "kute"})

    # ------------------------------------------------------------------
    def test_tolerance_variants_leave_soft_c_alone(self) -> None:
        self.assertEqual(romaji_tolerance_variants("cecil"), {"cecil"})
        self.assertEqual(romaji_tolerance_variants("cinder"), {"cinder"})

    # ------------------------------------------------------------------
    def test_tolerance_variants_of_non_latin_text_are_empty(self) -> None:
        self.assertEqual(romaji_tolerance_variants(""), set())
        self.assertEqual(romaji_tolerance_variants("ピカ"), set())


class NormalizedVariantsTests(unittest.TestCase):
    # ------------------------------------------------------------------
    def test_blank_values_have_no_variants(self) -> None:
        engine = BaselineOnlyTransliterator()
        self.assertEqual(normalized_variants("", engine), set())
        self.assertEqual(normalized_variants("   ", engine), set())
        self.assertEqual(normalized_variants("...", engine), set())

    # ------------------------------------------------------------------
    def test_latin_value_includes_tolerance_variants(self) -> None:
        engine = BaselineOnlyTransliterator()
        self.assertEqual(
            normalized_variants("Pikachuu", engine),
            {"pikachuu", "pikachu"},
        )

    # ------------------------------------------------------------------
    def test_secondary_value_includes_romanization(self) -> None:
        engine = FixedRomajiTransliterator("pikachuu")
        variants = normalized_variants("ピカチュウ", engine)
        self.assertEqual(variants, {"ぴかちゆう", "pikachuu", "pikachu"})
        self.assertEqual(engine.latin_calls, ["ピカチュウ"])

    # ------------------------------------------------------------------
    def test_latin_value_skips_romanization(self) -> None:
        engine = FixedRomajiTransliterator("unused")
        normalized_variants("Pikachu", engine)
        self.assertEqual(engine.latin_calls, [])

    # ------------------------------------------------------------------
    def test_default_transliterator_bridges_scripts(self) -> None:
        self.assertIn("pikachu", normalized_variants("ピカチュウ"))
        self.assertIn("ぴかちゆう", normalized_variants("ぴかちゅう"))


if __name__ == "__main__":
    unittest.main()
