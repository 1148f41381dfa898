from __future__ import annotations

from os.path import abspath, join

# [PATHS]
###############################################################################
ROOT_DIR = abspath(join(__file__, "../../.."))
PROJECT_DIR = join(ROOT_DIR, "DEXBRIDGE")
SETUP_DIR = join(PROJECT_DIR, "setup")
SETTINGS_PATH = join(SETUP_DIR, "settings")
RSC_PATH = join(PROJECT_DIR, "resources")
CATALOG_PATH = join(RSC_PATH, "catalog")

CONFIGURATION_FILE = join(SETTINGS_PATH, "configurations.json")
DEFAULT_CATALOG_FILE = join(CATALOG_PATH, "dex.json")

# [SCRIPT CLASSES]
###############################################################################
# Hiragana, Katakana (full and half width) and Han ideographs.
SECONDARY_SCRIPT_CHARS = (
    "ぁ-ゖゝ-ゟ"
    "ァ-ヺヽ-ヿㇰ-ㇿｦ-ｯｱ-ﾝ"
    "々〇〡-〩〸-〻"
    "㐀-䶿一-鿿豈-﫿\U00020000-\U0002ffff"
)
PROLONGED_SOUND_MARK = "ー"
SMALL_KANA_MAP: dict[str, str] = {
    "ぁ": "あ",
    "ぃ": "い",
    "ぅ": "う",
    "ぇ": "え",
    "ぉ": "お",
    "っ": "つ",
    "ゃ": "や",
    "ゅ": "ゆ",
    "ょ": "よ",
    "ゎ": "わ",
}
ROMAJI_DIGRAPH_REWRITES: tuple[tuple[str, str], ...] = (
    ("ca", "ka"),
    ("co", "ko"),
    ("cu", "ku"),
)

# [SEARCH DEFAULTS]
###############################################################################
DEFAULT_RESULT_LIMIT = 20
FUZZY_TRIGGER_COUNT = 5
PASTE_LENGTH_THRESHOLD = 30
MAX_PASTE_LENGTH = 5_000
RESULT_CACHE_LIMIT = 512

# Fuse-style precision tuning for the fuzzy fallback.
FUZZY_THRESHOLD = 0.22
FUZZY_MIN_MATCH_LENGTH = 2
FUZZY_SCORE_EPSILON = 0.001
FUZZY_FIELD_WEIGHTS: dict[str, float] = {
    "primary": 0.5,
    "secondary": 0.25,
    "translit": 0.15,
    "aliases": 0.1,
}

SECONDARY_WINDOW_MAX = 6
SECONDARY_WINDOW_MIN = 2
LATIN_WINDOW_MAX = 12
LATIN_WINDOW_MIN = 3

# [CATALOG]
###############################################################################
CATALOG_FIELD_ALIASES: dict[str, str] = {
    "dex": "id",
    "en": "primary",
    "ja": "secondary",
    "roomaji": "translit",
    "romaji": "translit",
    "types": "tags",
    "evolution": "related",
}
