# catalog/config.py
import os
from typing import Dict, List

# --- RECORD SOURCE ---
CATALOG_DATA_PATH: str = os.environ.get("CATALOG_DATA_PATH", "data/songs.json")
#CATALOG_DATA_PATH: str = "/srv/catalog/songs.json" # for docker containers


# --- FILTER SENTINELS ---
ALL: str = "All"
UNKNOWN: str = "Unknown"

# Editorial priority for the "type" dimension. Values not listed here are
# appended after these, in the order they are first seen.
TYPE_ORDER: List[str] = [
    "Original",
    "Collaboration",
    "Promotional",
    "Commercial",
    "Calligraphy",
    "Cover",
    "Participation",
]

# Exact-match dimensions, in the order they are evaluated and bookmarked.
NAME_DIMENSIONS: List[str] = ["lyricist", "composer", "arranger"]
EXACT_DIMENSIONS: List[str] = ["type", *NAME_DIMENSIONS]


# --- FUZZY SEARCH ---
# Titles and albums must outweigh contributor names.
SEARCH_FIELD_WEIGHTS: Dict[str, float] = {
    "title": 0.35,
    "album": 0.25,
    "lyricist": 0.2,
    "composer": 0.1,
    "arranger": 0.1,
}
# Weight of the composite text; it only decides membership when no single
# field reaches the threshold (queries spanning several fields).
SEARCH_CONTENT_WEIGHT: float = 0.05
# 0.0 = exact only, 1.0 = match anything.
SEARCH_THRESHOLD: float = 0.4
SEARCH_MIN_MATCH_CHAR_LENGTH: int = 1


# --- PAGINATION / INTERACTION ---
ITEMS_PER_PAGE: int = int(os.environ.get("ITEMS_PER_PAGE", "25"))
DEBOUNCE_MS: int = int(os.environ.get("DEBOUNCE_MS", "300"))
INDEX_CACHE_SIZE: int = int(os.environ.get("INDEX_CACHE_SIZE", "4"))


# --- LOGGING ---
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")
