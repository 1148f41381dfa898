from __future__ import annotations

import json
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

import pandas as pd
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from DEXBRIDGE.app.constants import CATALOG_FIELD_ALIASES
from DEXBRIDGE.app.logger import logger
from DEXBRIDGE.app.utils.services.text.aliases import parse_alias_list
from DEXBRIDGE.app.utils.services.text.normalization import coerce_text


###############################################################################
class CatalogError(ValueError):
    pass


###############################################################################
@dataclass(frozen=True, slots=True)
class Entity:
    id: int
    primary: str
    secondary: str
    translit: str | None = None
    aliases: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    generation: int | None = None
    related: tuple[int, ...] = ()


# -----------------------------------------------------------------------------
def is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (list, tuple, set, dict, str)):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


###############################################################################
class CatalogEntry(BaseModel):
    """
    Dataset record for a single catalog entity.
    - Accepts both the canonical field names and the legacy dex dataset keys
      (dex, en, ja, roomaji, types, evolution).
    - Aliases and tags may be lists, JSON-encoded lists or delimited strings.

    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int = Field(..., description="Unique, stable entity identifier.")
    primary: str = Field(..., min_length=1, examples=["Pikachu"])
    secondary: str = Field(..., min_length=1, examples=["ピカチュウ"])
    translit: str | None = Field(None, examples=["pikachuu"])
    aliases: tuple[str, ...] = Field(default=())
    tags: tuple[str, ...] = Field(default=())
    generation: int | None = Field(None, ge=1)
    related: tuple[int, ...] = Field(default=())

    @model_validator(mode="before")
    @classmethod
    def remap_legacy_keys(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        payload = dict(data)
        for legacy, canonical in CATALOG_FIELD_ALIASES.items():
            if legacy in payload and canonical not in payload:
                payload[canonical] = payload.pop(legacy)
        return {key: value for key, value in payload.items() if not is_missing(value)}

    @field_validator("id", mode="before")
    @classmethod
    def reject_boolean_id(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("id must be an integer, not a boolean")
        return value

    @field_validator("primary", "secondary", mode="before")
    @classmethod
    def strip_name(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("translit", mode="before")
    @classmethod
    def strip_translit(cls, value: Any) -> str | None:
        return coerce_text(value)

    @field_validator("aliases", mode="before")
    @classmethod
    def parse_aliases(cls, value: Any) -> tuple[str, ...]:
        return parse_alias_list(value)

    @field_validator("tags", mode="before")
    @classmethod
    def parse_tags(cls, value: Any) -> tuple[str, ...]:
        return tuple(dict.fromkeys(tag.lower() for tag in parse_alias_list(value)))

    @field_validator("related", mode="before")
    @classmethod
    def parse_related(cls, value: Any) -> Any:
        if isinstance(value, (int, str)) and not isinstance(value, bool):
            return (value,)
        return value

    # -------------------------------------------------------------------------
    def to_entity(self) -> Entity:
        return Entity(
            id=self.id,
            primary=self.primary,
            secondary=self.secondary,
            translit=self.translit,
            aliases=self.aliases,
            tags=self.tags,
            generation=self.generation,
            related=self.related,
        )


###############################################################################
def entities_from_records(
    records: Iterable[Any], *, strict: bool = True
) -> list[Entity]:
    entities: list[Entity] = []
    for index, record in enumerate(records):
        try:
            entry = CatalogEntry.model_validate(record)
        except ValidationError as exc:
            if strict:
                raise CatalogError(
                    f"Invalid catalog record at index {index}: {exc}"
                ) from exc
            logger.warning("Skipping invalid catalog record at index %d: %s", index, exc)
            continue
        entities.append(entry.to_entity())
    return entities


# -----------------------------------------------------------------------------
def entities_from_dataframe(
    dataset: pd.DataFrame | None, *, strict: bool = True
) -> list[Entity]:
    if dataset is None or dataset.empty:
        return []
    return entities_from_records(dataset.to_dict(orient="records"), strict=strict)


# -----------------------------------------------------------------------------
def load_catalog_file(path: str, *, strict: bool = True) -> list[Entity]:
    if not os.path.exists(path):
        raise CatalogError(f"Catalog file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise CatalogError(f"Unable to load catalog from {path}") from exc
    if not isinstance(payload, list):
        raise CatalogError("Catalog root must be a JSON array of records.")
    entities = entities_from_records(payload, strict=strict)
    entities.sort(key=lambda entity: entity.id)
    logger.info("Loaded %d catalog entities from %s", len(entities), path)
    return entities


__all__ = [
    "CatalogEntry",
    "CatalogError",
    "Entity",
    "entities_from_dataframe",
    "entities_from_records",
    "load_catalog_file",
]
