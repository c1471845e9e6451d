# catalog/titles.py
import json
from functools import lru_cache
from typing import Any, Dict, List

from settings import DATA_DIR, TITLES_CACHE_TTL
from memory.ttl_cache import TTLCache
from telemetry.logger import get_logger

log = get_logger(__name__)

MIN_QUERY_LENGTH = 2
MAX_RESULTS = 10

_CACHE: TTLCache[List[Dict[str, Any]]] = TTLCache(TITLES_CACHE_TTL)


# -----------------------------
# Dataset loading
# -----------------------------
@lru_cache(maxsize=1)
def _load_titles() -> List[Dict[str, Any]]:
    """
    Flatten the occupations dataset into one row per searchable title.
    Primary titles come first for each occupation, then its alternates.
    """
    path = DATA_DIR / "occupations.json"
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        log.warning("occupations dataset unavailable at %s: %s", path, e)
        return []

    rows: List[Dict[str, Any]] = []
    for occ in data.get("occupations") or []:
        code = (occ.get("code") or "").strip()
        title = (occ.get("title") or "").strip()
        if not code or not title:
            continue
        rows.append({"code": code, "title": title, "isAlternate": False})
        for alt in occ.get("alternates") or []:
            if isinstance(alt, str) and alt.strip():
                rows.append({"code": code, "title": alt.strip(), "isAlternate": True})
    return rows


# -----------------------------
# Public API
# -----------------------------
def search_titles(query: str, limit: int = MAX_RESULTS) -> List[Dict[str, Any]]:
    """
    Case-insensitive substring search over occupation titles.
    Returns [{id, code, name, displayName, isAlternate}], at most `limit`.
    """
    q = (query or "").strip().lower()
    if len(q) < MIN_QUERY_LENGTH:
        return []

    cached = _CACHE.get(q)
    if cached is not None:
        return cached[:limit]

    matches: List[Dict[str, Any]] = []
    seen = set()
    for row in _load_titles():
        if q not in row["title"].lower():
            continue
        key = (row["code"], row["title"].lower())
        if key in seen:
            continue
        seen.add(key)
        matches.append({
            "id": row["code"],
            "code": row["code"],
            "name": row["title"],
            "displayName": row["title"],
            "isAlternate": row["isAlternate"],
        })
        if len(matches) >= MAX_RESULTS:
            break

    _CACHE.set(q, matches)
    return matches[:limit]


def clear_cache() -> None:
    _CACHE.clear()
