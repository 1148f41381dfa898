from __future__ import annotations

import unittest

from DEXBRIDGE.app.configurations import DetectionSettings
from DEXBRIDGE.app.constants import DEFAULT_CATALOG_FILE
from DEXBRIDGE.app.utils.services.search.catalog import load_catalog_file
from DEXBRIDGE.app.utils.services.search.detection import (
    PasteDetector,
    detect_from_pasted_text,
    is_paste_mode,
)
from DEXBRIDGE.app.utils.services.search.indexes import build_indexes
from catalog_fixtures import build_stub_indexes, entity


class PasteModeTests(unittest.TestCase):
    # ------------------------------------------------------------------
    def test_length_boundary(self) -> None:
        self.assertFalse(is_paste_mode("a" * 30, 30))
        self.assertTrue(is_paste_mode("a" * 31, 30))

    # ------------------------------------------------------------------
    def test_whitespace_triggers_paste_mode(self) -> None:
        self.assertTrue(is_paste_mode("ab cd", 30))
        self.assertTrue(is_paste_mode("pika\nchu", 30))
        self.assertFalse(is_paste_mode("pikachu", 30))

    # ------------------------------------------------------------------
    def test_empty_text_is_not_pasted(self) -> None:
        self.assertFalse(is_paste_mode("", 30))

    # ------------------------------------------------------------------
    def test_default_threshold_comes_from_settings(self) -> None:
        self.assertFalse(is_paste_mode("x" * 30))
        self.assertTrue(is_paste_mode("x" * 31))


class TokenPassTests(unittest.TestCase):
    # ------------------------------------------------------------------
    def setUp(self) -> None:
        self.indexes = build_stub_indexes(
            [
                entity(25, "Pikachu", "ピカチュウ"),
                entity(6, "Charizard", "リザードン", translit="rizaadon"),
                entity(133, "Eevee", "イーブイ", aliases=("Eievui",)),
            ]
        )

    # ------------------------------------------------------------------
    def ids(self, text: str) -> list[int]:
        return [item.id for item in detect_from_pasted_text(self.indexes, text)]

    # ------------------------------------------------------------------
    def test_whole_tokens_match_every_field(self) -> None:
        self.assertEqual(self.ids("I love Pikachu!"), [25])
        self.assertEqual(self.ids("rizaadon, eievui"), [6, 133])

    # ------------------------------------------------------------------
    def test_each_entity_is_reported_once(self) -> None:
        self.assertEqual(self.ids("Pikachu pikachu PIKACHU superpikachuman"), [25])

    # ------------------------------------------------------------------
    def test_results_are_sorted_by_id(self) -> None:
        self.assertEqual(self.ids("Eevee then Pikachu then Charizard"), [6, 25, 133])

    # ------------------------------------------------------------------
    def test_empty_text_detects_nothing(self) -> None:
        self.assertEqual(self.ids(""), [])
        self.assertEqual(self.ids("nothing to see here"), [])


class WindowPassTests(unittest.TestCase):
    # ------------------------------------------------------------------
    def setUp(self) -> None:
        self.catalog = [
            entity(50, "Alpha", "ピカチュウモ"),
            entity(60, "Bravo", "ウモ"),
            entity(150, "Mewtwo", "ミュウツー"),
            entity(151, "Mew", "ミュウ"),
            entity(6, "Charizard", "リザードン"),
            entity(70, "Ab", "エー"),
        ]
        self.indexes = build_stub_indexes(self.catalog)

    # ------------------------------------------------------------------
    def ids(self, text: str) -> list[int]:
        return [item.id for item in detect_from_pasted_text(self.indexes, text)]

    # ------------------------------------------------------------------
    def test_secondary_run_inside_sentence(self) -> None:
        self.assertEqual(self.ids("これはリザードンです"), [6])

    # ------------------------------------------------------------------
    def test_prolonged_mark_does_not_hide_names(self) -> None:
        self.assertEqual(self.ids("Pikachu と リザードン が好き"), [6])

    # ------------------------------------------------------------------
    def test_distinct_short_entity_is_still_detected(self) -> None:
        self.assertEqual(self.ids("これはピカチュウモです"), [50, 60])
        self.assertEqual(self.ids("mewtwo!"), [150, 151])

    # ------------------------------------------------------------------
    def test_short_alias_of_claimed_entity_is_not_reported_again(self) -> None:
        catalog = [
            entity(50, "Alpha", "ピカチュウモ", aliases=("ウモ",)),
            entity(151, "Mew", "ミュウ", aliases=("mewtwo",)),
        ]
        indexes = build_stub_indexes(catalog)
        detected = detect_from_pasted_text(indexes, "これはピカチュウモです")
        self.assertEqual([item.id for item in detected], [50])
        detected = detect_from_pasted_text(indexes, "xxmewtwoxx")
        self.assertEqual([item.id for item in detected], [151])

    # ------------------------------------------------------------------
    def test_latin_names_found_inside_longer_words(self) -> None:
        self.assertEqual(self.ids("xxcharizardyy"), [6])

    # ------------------------------------------------------------------
    def test_latin_windows_ignore_two_letter_names(self) -> None:
        self.assertEqual(self.ids("xabx"), [])
        self.assertEqual(self.ids("ab"), [70])

    # ------------------------------------------------------------------
    def test_window_sizes_follow_detection_settings(self) -> None:
        narrow = DetectionSettings(
            secondary_window_max=6,
            secondary_window_min=2,
            latin_window_max=3,
            latin_window_min=3,
        )
        detector = PasteDetector(self.indexes, narrow)
        self.assertEqual([item.id for item in detector.detect("xxcharizardyy")], [])
        self.assertEqual([item.id for item in detector.detect("xxmewxx")], [151])


class BundledCatalogDetectionTests(unittest.TestCase):
    # ------------------------------------------------------------------
    def test_mixed_script_paste(self) -> None:
        indexes = build_indexes(load_catalog_file(DEFAULT_CATALOG_FILE))
        detected = detect_from_pasted_text(
            indexes, "ピカチュウとリザードンが大好き! also Snorlax"
        )
        # リザード (Charmeleon) is a prefix of リザードン and surfaces too
        self.assertEqual([item.id for item in detected], [5, 6, 25, 143])


if __name__ == "__main__":
    unittest.main()
