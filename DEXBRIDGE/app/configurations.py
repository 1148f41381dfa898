from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any

from DEXBRIDGE.app.constants import (
    CONFIGURATION_FILE,
    DEFAULT_RESULT_LIMIT,
    FUZZY_FIELD_WEIGHTS,
    FUZZY_MIN_MATCH_LENGTH,
    FUZZY_THRESHOLD,
    FUZZY_TRIGGER_COUNT,
    LATIN_WINDOW_MAX,
    LATIN_WINDOW_MIN,
    MAX_PASTE_LENGTH,
    PASTE_LENGTH_THRESHOLD,
    RESULT_CACHE_LIMIT,
    SECONDARY_WINDOW_MAX,
    SECONDARY_WINDOW_MIN,
)
from DEXBRIDGE.app.utils.types import (
    coerce_bool,
    coerce_float,
    coerce_positive_int,
)


###############################################################################
@dataclass(frozen=True)
class SearchSettings:
    default_limit: int
    fuzzy_trigger_count: int
    paste_length_threshold: int
    max_paste_length: int
    result_cache_limit: int


# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class FuzzySettings:
    threshold: float
    ignore_location: bool
    min_match_length: int
    primary_weight: float
    secondary_weight: float
    translit_weight: float
    aliases_weight: float

    # -------------------------------------------------------------------------
    def field_weights(self) -> tuple[tuple[str, float], ...]:
        return (
            ("primary", self.primary_weight),
            ("secondary", self.secondary_weight),
            ("translit", self.translit_weight),
            ("aliases", self.aliases_weight),
        )


# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class DetectionSettings:
    secondary_window_max: int
    secondary_window_min: int
    latin_window_max: int
    latin_window_min: int


# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class AppSettings:
    search: SearchSettings
    fuzzy: FuzzySettings
    detection: DetectionSettings


###############################################################################
def ensure_mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


# -----------------------------------------------------------------------------
def load_configuration_data(path: str) -> dict[str, Any]:
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise RuntimeError(f"Unable to load configuration from {path}") from exc
    if not isinstance(data, dict):
        raise RuntimeError("Configuration root must be a JSON object.")
    return data


###############################################################################
def build_search_settings(data: dict[str, Any]) -> SearchSettings:
    return SearchSettings(
        default_limit=coerce_positive_int(data.get("default_limit"), DEFAULT_RESULT_LIMIT),
        fuzzy_trigger_count=coerce_positive_int(
            data.get("fuzzy_trigger_count"),
            FUZZY_TRIGGER_COUNT,
        ),
        paste_length_threshold=coerce_positive_int(
            data.get("paste_length_threshold"),
            PASTE_LENGTH_THRESHOLD,
        ),
        max_paste_length=coerce_positive_int(
            data.get("max_paste_length"),
            MAX_PASTE_LENGTH,
        ),
        result_cache_limit=coerce_positive_int(
            data.get("result_cache_limit"),
            RESULT_CACHE_LIMIT,
        ),
    )


# -----------------------------------------------------------------------------
def build_fuzzy_settings(data: dict[str, Any]) -> FuzzySettings:
    weights = ensure_mapping(data.get("weights"))
    return FuzzySettings(
        threshold=coerce_float(data.get("threshold"), FUZZY_THRESHOLD, 0.0, 1.0),
        ignore_location=coerce_bool(data.get("ignore_location"), True),
        min_match_length=coerce_positive_int(
            data.get("min_match_length"),
            FUZZY_MIN_MATCH_LENGTH,
        ),
        primary_weight=coerce_float(
            weights.get("primary"), FUZZY_FIELD_WEIGHTS["primary"], minimum=0.0
        ),
        secondary_weight=coerce_float(
            weights.get("secondary"), FUZZY_FIELD_WEIGHTS["secondary"], minimum=0.0
        ),
        translit_weight=coerce_float(
            weights.get("translit"), FUZZY_FIELD_WEIGHTS["translit"], minimum=0.0
        ),
        aliases_weight=coerce_float(
            weights.get("aliases"), FUZZY_FIELD_WEIGHTS["aliases"], minimum=0.0
        ),
    )


# -----------------------------------------------------------------------------
def build_detection_settings(data: dict[str, Any]) -> DetectionSettings:
    secondary_min = coerce_positive_int(
        data.get("secondary_window_min"), SECONDARY_WINDOW_MIN
    )
    secondary_max = coerce_positive_int(
        data.get("secondary_window_max"), SECONDARY_WINDOW_MAX
    )
    latin_min = coerce_positive_int(data.get("latin_window_min"), LATIN_WINDOW_MIN)
    latin_max = coerce_positive_int(data.get("latin_window_max"), LATIN_WINDOW_MAX)
    if secondary_max < secondary_min:
        secondary_max = secondary_min
    if latin_max < latin_min:
        latin_max = latin_min
    return DetectionSettings(
        secondary_window_max=secondary_max,
        secondary_window_min=secondary_min,
        latin_window_max=latin_max,
        latin_window_min=latin_min,
    )


# -----------------------------------------------------------------------------
def build_app_settings(data: dict[str, Any] | Any) -> AppSettings:
    payload = ensure_mapping(data)
    return AppSettings(
        search=build_search_settings(ensure_mapping(payload.get("search"))),
        fuzzy=build_fuzzy_settings(ensure_mapping(payload.get("fuzzy"))),
        detection=build_detection_settings(ensure_mapping(payload.get("detection"))),
    )


# [CONFIGURATION LOADER]
###############################################################################
def get_settings(config_path: str | None = None) -> AppSettings:
    path = config_path or CONFIGURATION_FILE
    payload = load_configuration_data(path)
    return build_app_settings(payload)


settings = get_settings()
