from __future__ import annotations

import re
import unicodedata
from typing import Any

import pandas as pd

from DEXBRIDGE.app.constants import (
    PROLONGED_SOUND_MARK,
    ROMAJI_DIGRAPH_REWRITES,
    SECONDARY_SCRIPT_CHARS,
    SMALL_KANA_MAP,
)
from DEXBRIDGE.app.utils.services.text.transliteration import (
    Transliterator,
    default_transliterator,
)

SECONDARY_CHAR_RE = re.compile(f"[{SECONDARY_SCRIPT_CHARS}{PROLONGED_SOUND_MARK}]")
LATIN_LETTER_RE = re.compile(r"[A-Za-z]")
NON_LATIN_RE = re.compile(r"[^a-z0-9]+")
VOWEL_RUN_RE = re.compile(r"([aeiou])\1+")


# -----------------------------------------------------------------------------
def coerce_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        return text or None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    text = str(value).strip()
    return text or None


# -----------------------------------------------------------------------------
def contains_latin(value: str) -> bool:
    return bool(value) and LATIN_LETTER_RE.search(value) is not None


# -----------------------------------------------------------------------------
def contains_secondary_script(value: str) -> bool:
    return bool(value) and SECONDARY_CHAR_RE.search(value) is not None


# -----------------------------------------------------------------------------
def is_separator(char: str) -> bool:
    if char.isspace() or char == "_":
        return True
    return unicodedata.category(char)[0] in ("P", "S")


# -----------------------------------------------------------------------------
def strip_separators(value: str) -> str:
    return "".join(char for char in value if not is_separator(char))


# -----------------------------------------------------------------------------
def fold_kana(value: str, transliterator: Transliterator | None = None) -> str:
    engine = transliterator or default_transliterator
    baseline = engine.to_baseline_script(value)
    return "".join(
        SMALL_KANA_MAP.get(char, char)
        for char in baseline
        if char != PROLONGED_SOUND_MARK
    )


# -----------------------------------------------------------------------------
def normalize(value: str, transliterator: Transliterator | None = None) -> str:
    """
    Canonical lookup form of a name: NFKC, lowercase, no separators, kana
    folded to full-size hiragana without prolonged-sound marks.

    """
    if not value:
        return ""
    folded = unicodedata.normalize("NFKC", value).lower().strip()
    stripped = fold_kana(strip_separators(folded), transliterator)
    # dropped separators and marks can leave a base letter next to a combining mark
    return unicodedata.normalize("NFKC", stripped)


# -----------------------------------------------------------------------------
def normalize_latin(value: str) -> str:
    if not value:
        return ""
    lowered = unicodedata.normalize("NFKC", value).lower()
    return NON_LATIN_RE.sub("", lowered)


# -----------------------------------------------------------------------------
def collapse_vowel_runs(value: str) -> str:
    # rizaadon -> rizadon
    return VOWEL_RUN_RE.sub(r"\1", value)


# -----------------------------------------------------------------------------
def romaji_tolerance_variants(value: str) -> set[str]:
    base = normalize_latin(value)
    if not base:
        return set()
    variants = {base}
    rewritten = base
    for source, target in ROMAJI_DIGRAPH_REWRITES:
        rewritten = rewritten.replace(source, target)
    variants.add(rewritten)
    variants.update([collapse_vowel_runs(variant) for variant in variants])
    return variants


# -----------------------------------------------------------------------------
def normalized_variants(
    value: str, transliterator: Transliterator | None = None
) -> set[str]:
    engine = transliterator or default_transliterator
    base = normalize(value, engine)
    if not base:
        return set()
    variants = {base}
    if contains_latin(value):
        for romaji in romaji_tolerance_variants(value):
            variants.add(normalize(romaji, engine))
            variants.add(normalize(engine.to_secondary_script(romaji), engine))
    if contains_secondary_script(value):
        romaji = engine.to_latin(value)
        variants.add(normalize(romaji, engine))
        for tolerant in romaji_tolerance_variants(romaji):
            variants.add(normalize(tolerant, engine))
    variants.discard("")
    return variants


__all__ = [
    "coerce_text",
    "collapse_vowel_runs",
    "contains_latin",
    "contains_secondary_script",
    "fold_kana",
    "normalize",
    "normalize_latin",
    "normalized_variants",
    "romaji_tolerance_variants",
    "strip_separators",
]
