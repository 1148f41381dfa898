from __future__ import annotations

import json
import re
from typing import Any

from DEXBRIDGE.app.utils.services.text.normalization import coerce_text

ALIAS_SPLIT_RE = re.compile(r"[;,/\n]+")


# -----------------------------------------------------------------------------
def try_parse_json(value: str) -> Any:
    if not value:
        return None
    try:
        return json.loads(value)
    except (TypeError, ValueError):
        return None


# -----------------------------------------------------------------------------
def split_alias_string(value: str) -> list[str]:
    if not value:
        return []
    return [segment.strip() for segment in ALIAS_SPLIT_RE.split(value) if segment.strip()]


# -----------------------------------------------------------------------------
def extract_alias_strings(value: Any, seen_refs: set[int] | None = None) -> list[str]:
    """
    Flatten an alias payload into raw strings. Delimited strings are split,
    JSON-encoded containers are decoded, nested containers are walked once.

    """
    if seen_refs is None:
        seen_refs = set()
    if value is None:
        return []
    if isinstance(value, dict):
        if id(value) in seen_refs:
            return []
        seen_refs.add(id(value))
        collected: list[str] = []
        for entry in value.values():
            collected.extend(extract_alias_strings(entry, seen_refs))
        return collected
    if isinstance(value, (list, tuple, set)):
        if id(value) in seen_refs:
            return []
        seen_refs.add(id(value))
        collected = []
        for entry in value:
            if isinstance(entry, str):
                text = coerce_text(entry)
                if text:
                    collected.append(text)
                continue
            collected.extend(extract_alias_strings(entry, seen_refs))
        return collected
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.startswith(("{", "[")) and stripped.endswith(("}", "]")):
            parsed = try_parse_json(stripped)
            if isinstance(parsed, (dict, list)):
                return extract_alias_strings(parsed, seen_refs)
        return split_alias_string(stripped)
    text = coerce_text(value)
    if text is None:
        return []
    return extract_alias_strings(text, seen_refs)


# -----------------------------------------------------------------------------
def parse_alias_list(value: Any) -> tuple[str, ...]:
    return tuple(dict.fromkeys(extract_alias_strings(value)))


__all__ = [
    "extract_alias_strings",
    "parse_alias_list",
    "split_alias_string",
    "try_parse_json",
]
