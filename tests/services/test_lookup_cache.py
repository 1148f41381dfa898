from __future__ import annotations

import unittest

from DEXBRIDGE.app.utils.services.search.lookup import (
    BoundedCache,
    CACHE_MISS,
)


class BoundedCacheTests(unittest.TestCase):
    # ------------------------------------------------------------------
    def test_cache_eviction_follows_lru_order(self) -> None:
        cache: BoundedCache[str, int] = BoundedCache(limit=2)
        cache.put("pika", 1)
        cache.put("chu", 2)
        cache.get("pika")
        cache.put("rai", 3)
        self.assertEqual(cache.get("pika", CACHE_MISS), 1)
        self.assertIs(cache.get("chu", CACHE_MISS), CACHE_MISS)
        self.assertEqual(cache.get("rai", CACHE_MISS), 3)
        self.assertEqual(len(cache), 2)

    # ------------------------------------------------------------------
    def test_cache_accepts_empty_results(self) -> None:
        cache: BoundedCache[str, list[int]] = BoundedCache(limit=1)
        cache.put("zzz", [])
        self.assertEqual(cache.get("zzz", CACHE_MISS), [])
        cache.put("replacement", [25])
        self.assertIs(cache.get("zzz", CACHE_MISS), CACHE_MISS)

    # ------------------------------------------------------------------
    def test_cache_clear_and_minimum_limit(self) -> None:
        cache: BoundedCache[str, int] = BoundedCache(limit=0)
        self.assertEqual(cache.limit, 1)
        cache.put("pika", 1)
        cache.clear()
        self.assertEqual(len(cache), 0)


if __name__ == "__main__":
    unittest.main()
