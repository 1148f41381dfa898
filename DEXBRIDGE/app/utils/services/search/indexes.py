from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from DEXBRIDGE.app.configurations import FuzzySettings, settings
from DEXBRIDGE.app.logger import logger
from DEXBRIDGE.app.utils.services.search.catalog import Entity
from DEXBRIDGE.app.utils.services.search.fuzzy import FuzzyMatcher, RapidFuzzMatcher
from DEXBRIDGE.app.utils.services.text.normalization import (
    normalize,
    normalized_variants,
)
from DEXBRIDGE.app.utils.services.text.transliteration import (
    Transliterator,
    default_transliterator,
)

MatcherFactory = Callable[[Sequence[Entity], FuzzySettings], FuzzyMatcher]


###############################################################################
@dataclass(frozen=True, slots=True)
class PreparedEntity:
    entity: Entity
    values: tuple[str, ...]


###############################################################################
@dataclass(frozen=True, slots=True)
class SearchIndexes:
    prepared: tuple[PreparedEntity, ...]
    primary_map: Mapping[str, Entity]
    secondary_map: Mapping[str, Entity]
    translit_map: Mapping[str, Entity]
    alias_map: Mapping[str, Entity]
    fuzzy: FuzzyMatcher
    transliterator: Transliterator

    # -------------------------------------------------------------------------
    @property
    def entities(self) -> tuple[Entity, ...]:
        return tuple(item.entity for item in self.prepared)

    # -------------------------------------------------------------------------
    def normalize(self, value: str) -> str:
        return normalize(value, self.transliterator)

    # -------------------------------------------------------------------------
    def variants(self, value: str) -> set[str]:
        return normalized_variants(value, self.transliterator)


###############################################################################
class IndexBuilder:
    """
    Derives the read-only lookup structures for a catalog. Keys collide on a
    last-write-wins basis: a later entity sharing a normalized variant with an
    earlier one replaces it in that map.

    """

    def __init__(
        self,
        *,
        fuzzy_settings: FuzzySettings | None = None,
        transliterator: Transliterator | None = None,
        matcher_factory: MatcherFactory | None = None,
    ) -> None:
        self.fuzzy_settings = fuzzy_settings or settings.fuzzy
        self.transliterator = transliterator or default_transliterator
        self.matcher_factory = matcher_factory or RapidFuzzMatcher.build

    # -------------------------------------------------------------------------
    def field_variants(self, entity: Entity) -> dict[str, set[str]]:
        aliases: set[str] = set()
        for alias in entity.aliases:
            aliases.update(normalized_variants(alias, self.transliterator))
        return {
            "primary": normalized_variants(entity.primary, self.transliterator),
            "secondary": normalized_variants(entity.secondary, self.transliterator),
            "translit": (
                normalized_variants(entity.translit, self.transliterator)
                if entity.translit
                else set()
            ),
            "aliases": aliases,
        }

    # -------------------------------------------------------------------------
    def register_keys(
        self,
        index: dict[str, Entity],
        keys: set[str],
        entity: Entity,
        field_name: str,
    ) -> int:
        collisions = 0
        for key in sorted(keys):
            previous = index.get(key)
            if previous is not None and previous.id != entity.id:
                collisions += 1
                logger.debug(
                    "Key '%s' in %s map moved from #%d to #%d",
                    key,
                    field_name,
                    previous.id,
                    entity.id,
                )
            index[key] = entity
        return collisions

    # -------------------------------------------------------------------------
    def build(self, entities: Iterable[Entity]) -> SearchIndexes:
        start = time.perf_counter()
        catalog = tuple(entities)
        prepared: list[PreparedEntity] = []
        maps: dict[str, dict[str, Entity]] = {
            "primary": {},
            "secondary": {},
            "translit": {},
            "aliases": {},
        }
        collisions = 0
        for entity in catalog:
            variants = self.field_variants(entity)
            values: set[str] = set()
            for field_name, keys in variants.items():
                values.update(keys)
                collisions += self.register_keys(
                    maps[field_name], keys, entity, field_name
                )
            prepared.append(PreparedEntity(entity=entity, values=tuple(sorted(values))))

        fuzzy = self.matcher_factory(catalog, self.fuzzy_settings)
        indexes = SearchIndexes(
            prepared=tuple(prepared),
            primary_map=MappingProxyType(maps["primary"]),
            secondary_map=MappingProxyType(maps["secondary"]),
            translit_map=MappingProxyType(maps["translit"]),
            alias_map=MappingProxyType(maps["aliases"]),
            fuzzy=fuzzy,
            transliterator=self.transliterator,
        )
        elapsed_s = time.perf_counter() - start
        logger.info(
            "Built search indexes for %d entities "
            "(%d primary, %d secondary, %d translit, %d alias keys) in %.3f s",
            len(catalog),
            len(maps["primary"]),
            len(maps["secondary"]),
            len(maps["translit"]),
            len(maps["aliases"]),
            elapsed_s,
        )
        if collisions:
            logger.info("%d normalized keys were overwritten by later entities", collisions)
        return indexes


# -----------------------------------------------------------------------------
def build_indexes(
    entities: Iterable[Entity],
    *,
    fuzzy_settings: FuzzySettings | None = None,
    transliterator: Transliterator | None = None,
    matcher_factory: MatcherFactory | None = None,
) -> SearchIndexes:
    builder = IndexBuilder(
        fuzzy_settings=fuzzy_settings,
        transliterator=transliterator,
        matcher_factory=matcher_factory,
    )
    return builder.build(entities)


__all__ = [
    "IndexBuilder",
    "MatcherFactory",
    "PreparedEntity",
    "SearchIndexes",
    "build_indexes",
]
