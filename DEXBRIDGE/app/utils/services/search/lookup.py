from __future__ import annotations

import time
from collections import OrderedDict
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from DEXBRIDGE.app.configurations import AppSettings, settings
from DEXBRIDGE.app.logger import logger
from DEXBRIDGE.app.utils.services.search.catalog import Entity
from DEXBRIDGE.app.utils.services.search.detection import (
    detect_from_pasted_text,
    is_paste_mode,
)
from DEXBRIDGE.app.utils.services.search.direct import fast_search
from DEXBRIDGE.app.utils.services.search.fuzzy import fuzzy_search, merge_results
from DEXBRIDGE.app.utils.services.search.indexes import SearchIndexes, build_indexes
from DEXBRIDGE.app.utils.services.text.transliteration import Transliterator

KT = TypeVar("KT")
VT = TypeVar("VT")
CACHE_MISS = object()


###############################################################################
class BoundedCache(Generic[KT, VT]):
    __slots__ = ("limit", "store")

    def __init__(self, limit: int) -> None:
        self.limit = max(int(limit), 1)
        self.store: OrderedDict[KT, VT] = OrderedDict()

    # -------------------------------------------------------------------------
    def get(self, key: KT, default: Any = CACHE_MISS) -> Any:
        if key not in self.store:
            return default
        self.store.move_to_end(key)
        return self.store[key]

    # -------------------------------------------------------------------------
    def put(self, key: KT, value: VT) -> None:
        if key in self.store:
            self.store.move_to_end(key)
        elif len(self.store) >= self.limit:
            self.store.popitem(last=False)
        self.store[key] = value

    # -------------------------------------------------------------------------
    def clear(self) -> None:
        self.store.clear()

    # -------------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self.store)


###############################################################################
@dataclass(slots=True)
class LookupResult:
    query: str
    paste_mode: bool
    detected: list[Entity] = field(default_factory=list)
    results: list[Entity] = field(default_factory=list)


# -----------------------------------------------------------------------------
def format_entry(entity: Entity) -> str:
    return f"#{entity.id} {entity.primary} / {entity.secondary}"


###############################################################################
class SearchService:
    """
    Search front door for one catalog. Direct matches are always computed;
    the fuzzy fallback only runs when they are sparse or when the caller
    asks for it, and its hits are appended after the direct ones.

    """

    def __init__(self, indexes: SearchIndexes, app_settings: AppSettings | None = None) -> None:
        self.indexes = indexes
        self.settings = app_settings or settings
        self.result_cache: BoundedCache[tuple[str, bool, int], list[Entity]] = BoundedCache(
            self.settings.search.result_cache_limit
        )

    # -------------------------------------------------------------------------
    @classmethod
    def from_entities(
        cls,
        entities: Iterable[Entity],
        app_settings: AppSettings | None = None,
        *,
        transliterator: Transliterator | None = None,
    ) -> SearchService:
        resolved = app_settings or settings
        indexes = build_indexes(
            entities,
            fuzzy_settings=resolved.fuzzy,
            transliterator=transliterator,
        )
        return cls(indexes, resolved)

    # -------------------------------------------------------------------------
    def search(
        self,
        query: str,
        *,
        fuzzy_enabled: bool = False,
        limit: int | None = None,
    ) -> list[Entity]:
        max_results = limit if limit is not None else self.settings.search.default_limit
        cache_key = (query, fuzzy_enabled, max_results)
        cached = self.result_cache.get(cache_key, CACHE_MISS)
        if cached is not CACHE_MISS:
            return list(cached)

        start = time.perf_counter()
        direct = fast_search(self.indexes, query, max_results)
        if len(direct) >= self.settings.search.fuzzy_trigger_count and not fuzzy_enabled:
            results = direct
        else:
            fuzzy = fuzzy_search(self.indexes, query, max_results)
            results = merge_results(direct, fuzzy, max_results)
        elapsed_s = time.perf_counter() - start
        logger.debug(
            "Query '%s' returned %d results (%d direct) in %.3f s",
            query,
            len(results),
            len(direct),
            elapsed_s,
        )
        self.result_cache.put(cache_key, list(results))
        return results

    # -------------------------------------------------------------------------
    def detect(self, text: str) -> list[Entity]:
        if not is_paste_mode(text, self.settings.search.paste_length_threshold):
            return []
        detected = detect_from_pasted_text(self.indexes, text, self.settings.detection)
        logger.debug("Detected %d entities in pasted text", len(detected))
        return detected

    # -------------------------------------------------------------------------
    def lookup(
        self,
        text: str,
        *,
        fuzzy_enabled: bool = False,
        limit: int | None = None,
    ) -> LookupResult:
        paste_mode = is_paste_mode(text, self.settings.search.paste_length_threshold)
        return LookupResult(
            query=text,
            paste_mode=paste_mode,
            detected=self.detect(text) if paste_mode else [],
            results=self.search(text, fuzzy_enabled=fuzzy_enabled, limit=limit),
        )


__all__ = [
    "BoundedCache",
    "CACHE_MISS",
    "LookupResult",
    "SearchService",
    "format_entry",
]
