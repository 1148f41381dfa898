from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from rapidfuzz import fuzz, process
from rapidfuzz.utils import default_process

from DEXBRIDGE.app.configurations import FuzzySettings
from DEXBRIDGE.app.constants import FUZZY_SCORE_EPSILON
from DEXBRIDGE.app.utils.services.search.catalog import Entity

if TYPE_CHECKING:
    from DEXBRIDGE.app.utils.services.search.indexes import SearchIndexes


###############################################################################
@runtime_checkable
class FuzzyMatcher(Protocol):
    def query(self, text: str, limit: int) -> list[Entity]: ...


###############################################################################
class RapidFuzzMatcher:
    """
    Approximate matcher over the raw entity fields.

    Every field value is a rapidfuzz choice. A field counts as matched when its
    similarity clears (1 - threshold) * 100; an entity is scored like Fuse.js,
    as the product of (1 - similarity) ** normalized_weight over its matched
    fields, so lower scores rank first.

    """

    def __init__(self, entities: Sequence[Entity], options: FuzzySettings) -> None:
        self.entities = tuple(entities)
        self.options = options
        weights = [(name, weight) for name, weight in options.field_weights() if weight > 0]
        total_weight = sum(weight for _, weight in weights) or 1.0
        self.weights = {name: weight / total_weight for name, weight in weights}
        self.scorer = fuzz.partial_ratio if options.ignore_location else fuzz.ratio
        self.score_cutoff = (1.0 - options.threshold) * 100.0
        self.choices: list[str] = []
        self.owners: list[tuple[int, str]] = []
        for position, entity in enumerate(self.entities):
            for field_name in self.weights:
                for value in self.field_values(entity, field_name):
                    self.choices.append(value)
                    self.owners.append((position, field_name))

    # -------------------------------------------------------------------------
    @classmethod
    def build(cls, entities: Sequence[Entity], options: FuzzySettings) -> RapidFuzzMatcher:
        return cls(entities, options)

    # -------------------------------------------------------------------------
    @staticmethod
    def field_values(entity: Entity, field_name: str) -> list[str]:
        if field_name == "aliases":
            return [alias for alias in entity.aliases if alias]
        value = getattr(entity, field_name, None)
        return [value] if value else []

    # -------------------------------------------------------------------------
    def query(self, text: str, limit: int) -> list[Entity]:
        if limit <= 0 or not self.choices:
            return []
        processed = default_process(text)
        if len(processed) < self.options.min_match_length:
            return []
        matches = process.extract(
            processed,
            self.choices,
            scorer=self.scorer,
            processor=default_process,
            score_cutoff=self.score_cutoff,
            limit=None,
        )
        field_scores: dict[int, dict[str, float]] = {}
        for _, similarity, choice_index in matches:
            position, field_name = self.owners[choice_index]
            scores = field_scores.setdefault(position, {})
            if similarity > scores.get(field_name, -1.0):
                scores[field_name] = similarity

        ranked: list[tuple[float, int, Entity]] = []
        for position, scores in field_scores.items():
            entity = self.entities[position]
            ranked.append((self.combine_scores(scores), entity.id, entity))
        ranked.sort(key=lambda item: (item[0], item[1]))
        return [entity for _, _, entity in ranked[:limit]]

    # -------------------------------------------------------------------------
    def combine_scores(self, scores: dict[str, float]) -> float:
        combined = 1.0
        for field_name, similarity in scores.items():
            distance = max(1.0 - similarity / 100.0, FUZZY_SCORE_EPSILON)
            combined *= distance ** self.weights[field_name]
        return combined


###############################################################################
def fuzzy_search(indexes: SearchIndexes, query: str, limit: int = 20) -> list[Entity]:
    if not query or not query.strip():
        return []
    return indexes.fuzzy.query(query, limit)[:limit]


# -----------------------------------------------------------------------------
def merge_results(
    direct: Sequence[Entity], fuzzy: Sequence[Entity], limit: int
) -> list[Entity]:
    merged: list[Entity] = []
    seen: set[int] = set()
    for entity in (*direct, *fuzzy):
        if len(merged) >= limit:
            break
        if entity.id in seen:
            continue
        seen.add(entity.id)
        merged.append(entity)
    return merged


__all__ = [
    "FuzzyMatcher",
    "RapidFuzzMatcher",
    "fuzzy_search",
    "merge_results",
]
