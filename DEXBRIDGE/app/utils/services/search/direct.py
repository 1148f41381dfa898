from __future__ import annotations

from DEXBRIDGE.app.utils.services.search.catalog import Entity
from DEXBRIDGE.app.utils.services.search.indexes import SearchIndexes

EXACT_RANK = 1
PREFIX_RANK = 2
SUBSTRING_RANK = 3


# -----------------------------------------------------------------------------
def rank_value(query: str, candidate: str) -> int | None:
    if not query or not candidate:
        return None
    if candidate == query:
        return EXACT_RANK
    if candidate.startswith(query):
        return PREFIX_RANK
    if query in candidate:
        return SUBSTRING_RANK
    return None


# -----------------------------------------------------------------------------
def best_rank(queries: list[str], values: tuple[str, ...]) -> int | None:
    best: int | None = None
    for query in queries:
        for value in values:
            rank = rank_value(query, value)
            if rank is None:
                continue
            if best is None or rank < best:
                best = rank
            if best == EXACT_RANK:
                return best
    return best


# -----------------------------------------------------------------------------
def fast_search(indexes: SearchIndexes, query: str, limit: int = 20) -> list[Entity]:
    """
    Rank entities against a query using the precomputed normalized variants:
    exact match first, then prefix, then substring, ties broken by id. An
    empty query lists the catalog in id order.

    """
    if limit <= 0:
        return []
    trimmed = query.strip() if query else ""
    if not trimmed:
        entities = sorted(indexes.entities, key=lambda entity: entity.id)
        return entities[:limit]

    queries = sorted(indexes.variants(trimmed))
    if not queries:
        return []

    ranked: list[tuple[int, int, Entity]] = []
    for prepared in indexes.prepared:
        rank = best_rank(queries, prepared.values)
        if rank is not None:
            ranked.append((rank, prepared.entity.id, prepared.entity))

    ranked.sort(key=lambda item: (item[0], item[1]))
    return [entity for _, _, entity in ranked[:limit]]


__all__ = [
    "EXACT_RANK",
    "PREFIX_RANK",
    "SUBSTRING_RANK",
    "best_rank",
    "fast_search",
    "rank_value",
]
