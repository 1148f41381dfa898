from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

from DEXBRIDGE.app.configurations import DetectionSettings, settings
from DEXBRIDGE.app.constants import PROLONGED_SOUND_MARK, SECONDARY_SCRIPT_CHARS
from DEXBRIDGE.app.utils.services.search.catalog import Entity
from DEXBRIDGE.app.utils.services.search.indexes import SearchIndexes

SECONDARY_RUN_RE = re.compile(f"[{SECONDARY_SCRIPT_CHARS}{PROLONGED_SOUND_MARK}]+")
LATIN_RUN_RE = re.compile(r"[A-Za-z]+")
TOKEN_SPLIT_RE = re.compile(f"[^{SECONDARY_SCRIPT_CHARS}A-Za-z0-9]+")
WHITESPACE_RE = re.compile(r"\s")


# -----------------------------------------------------------------------------
def is_paste_mode(text: str, threshold: int | None = None) -> bool:
    if not text:
        return False
    limit = threshold if threshold is not None else settings.search.paste_length_threshold
    return len(text) > limit or WHITESPACE_RE.search(text) is not None


###############################################################################
class PasteDetector:
    """
    Finds every catalog entity mentioned in free text. Three passes run in
    order (whole tokens, kana/kanji windows, Latin windows) and the first
    hit for an id wins, so longer windows claim an entity before any of
    their substrings are probed.

    """

    def __init__(
        self, indexes: SearchIndexes, options: DetectionSettings | None = None
    ) -> None:
        self.indexes = indexes
        self.options = options or settings.detection

    # -------------------------------------------------------------------------
    def probe(
        self,
        index: Mapping[str, Entity],
        token: str,
        matched: set[int],
        detected: list[Entity],
    ) -> None:
        key = self.indexes.normalize(token)
        if not key:
            return
        entity = index.get(key)
        if entity is None or entity.id in matched:
            return
        matched.add(entity.id)
        detected.append(entity)

    # -------------------------------------------------------------------------
    def scan_tokens(self, text: str, matched: set[int], detected: list[Entity]) -> None:
        maps = (
            self.indexes.primary_map,
            self.indexes.secondary_map,
            self.indexes.translit_map,
            self.indexes.alias_map,
        )
        for token in TOKEN_SPLIT_RE.split(text):
            if not token:
                continue
            for index in maps:
                self.probe(index, token, matched, detected)

    # -------------------------------------------------------------------------
    def scan_windows(
        self,
        run: str,
        maps: Sequence[Mapping[str, Entity]],
        largest: int,
        smallest: int,
        matched: set[int],
        detected: list[Entity],
    ) -> None:
        normalized_run = self.indexes.normalize(run)
        for size in range(largest, smallest - 1, -1):
            if len(normalized_run) < size:
                continue
            for start in range(len(normalized_run) - size + 1):
                window = normalized_run[start : start + size]
                for index in maps:
                    self.probe(index, window, matched, detected)

    # -------------------------------------------------------------------------
    def detect(self, text: str) -> list[Entity]:
        if not text:
            return []
        matched: set[int] = set()
        detected: list[Entity] = []

        self.scan_tokens(text, matched, detected)

        secondary_maps = (self.indexes.secondary_map, self.indexes.alias_map)
        for run in SECONDARY_RUN_RE.findall(text):
            self.scan_windows(
                run,
                secondary_maps,
                self.options.secondary_window_max,
                self.options.secondary_window_min,
                matched,
                detected,
            )

        latin_maps = (
            self.indexes.primary_map,
            self.indexes.translit_map,
            self.indexes.alias_map,
        )
        for run in LATIN_RUN_RE.findall(text):
            self.scan_windows(
                run,
                latin_maps,
                self.options.latin_window_max,
                self.options.latin_window_min,
                matched,
                detected,
            )

        detected.sort(key=lambda entity: entity.id)
        return detected


# -----------------------------------------------------------------------------
def detect_from_pasted_text(
    indexes: SearchIndexes,
    text: str,
    options: DetectionSettings | None = None,
) -> list[Entity]:
    return PasteDetector(indexes, options).detect(text)


__all__ = [
    "PasteDetector",
    "detect_from_pasted_text",
    "is_paste_mode",
]
