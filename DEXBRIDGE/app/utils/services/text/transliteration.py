from __future__ import annotations

from typing import Protocol, runtime_checkable

import jaconv


###############################################################################
@runtime_checkable
class Transliterator(Protocol):
    """
    Script conversions consumed by the normalizer.
    - to_secondary_script: romaji -> kana
    - to_latin: kana -> romaji, other characters left untouched
    - to_baseline_script: any kana -> hiragana

    """

    def to_secondary_script(self, text: str) -> str: ...

    def to_latin(self, text: str) -> str: ...

    def to_baseline_script(self, text: str) -> str: ...


###############################################################################
class JaconvTransliterator:

    # -------------------------------------------------------------------------
    def to_secondary_script(self, text: str) -> str:
        if not text:
            return ""
        return jaconv.alphabet2kana(text.lower())

    # -------------------------------------------------------------------------
    def to_latin(self, text: str) -> str:
        if not text:
            return ""
        return jaconv.kana2alphabet(jaconv.kata2hira(text))

    # -------------------------------------------------------------------------
    def to_baseline_script(self, text: str) -> str:
        if not text:
            return ""
        return jaconv.kata2hira(text)


default_transliterator = JaconvTransliterator()


__all__ = [
    "JaconvTransliterator",
    "Transliterator",
    "default_transliterator",
]
