from __future__ import annotations

import argparse
import sys

from DEXBRIDGE.app.configurations import get_settings
from DEXBRIDGE.app.constants import DEFAULT_CATALOG_FILE
from DEXBRIDGE.app.logger import logger
from DEXBRIDGE.app.utils.services.search.catalog import CatalogError, load_catalog_file
from DEXBRIDGE.app.utils.services.search.lookup import SearchService, format_entry


# -----------------------------------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Search a multi-script catalog or scan pasted text for entries."
    )
    parser.add_argument("query", nargs="*", help="Query text; read from stdin when omitted.")
    parser.add_argument(
        "--catalog",
        default=DEFAULT_CATALOG_FILE,
        help="Path to the JSON catalog file.",
    )
    parser.add_argument("--config", default=None, help="Path to a configuration file.")
    parser.add_argument("--fuzzy", action="store_true", help="Always merge fuzzy matches.")
    parser.add_argument("--limit", type=int, default=None, help="Maximum number of results.")
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Skip invalid catalog records instead of failing.",
    )
    return parser


# -----------------------------------------------------------------------------
def run(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    app_settings = get_settings(args.config)
    try:
        entities = load_catalog_file(args.catalog, strict=not args.lenient)
    except CatalogError as exc:
        logger.error("Unable to load catalog: %s", exc)
        return 1

    text = " ".join(args.query) if args.query else sys.stdin.read()
    text = text[: app_settings.search.max_paste_length]
    service = SearchService.from_entities(entities, app_settings)
    result = service.lookup(text, fuzzy_enabled=args.fuzzy, limit=args.limit)

    if result.paste_mode and result.detected:
        print("Detected:")
        for entity in result.detected:
            print(f"  {format_entry(entity)}")
        print("Results:")
    for entity in result.results:
        print(format_entry(entity))
    return 0


###############################################################################
if __name__ == "__main__":
    sys.exit(run())
