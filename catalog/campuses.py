# catalog/campuses.py
import json
from functools import lru_cache
from typing import Any, Dict, List, Optional

from settings import DATA_DIR, CAMPUSES_CACHE_TTL
from catalog.normalize import normalize_text
from memory.ttl_cache import TTLCache
from telemetry.logger import get_logger

log = get_logger(__name__)

# campuses that exist in the system but offer no programs
EXCLUDED_CAMPUS_IDS = {"pcatt"}

_CACHE: TTLCache[List[Dict[str, str]]] = TTLCache(CAMPUSES_CACHE_TTL)


@lru_cache(maxsize=1)
def _load_campuses() -> List[Dict[str, Any]]:
    path = DATA_DIR / "campuses.json"
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        log.warning("campus dataset unavailable at %s: %s", path, e)
        return []
    return [c for c in data if isinstance(c, dict) and c.get("id") and c.get("name")]


def list_campuses() -> List[Dict[str, str]]:
    """[{id, name}] sorted by name, minus campuses without programs."""
    cached = _CACHE.get("all")
    if cached is not None:
        return cached

    rows = [
        {"id": c["id"], "name": c["name"]}
        for c in _load_campuses()
        if c["id"].lower() not in EXCLUDED_CAMPUS_IDS and c["name"].lower() not in EXCLUDED_CAMPUS_IDS
    ]
    rows.sort(key=lambda c: normalize_text(c["name"]))
    _CACHE.set("all", rows)
    return rows


def find_campus(name_or_id: str) -> Optional[Dict[str, Any]]:
    """
    Resolve a campus by id, display name or alias.
    Matching ignores case, diacritics and ʻokina.
    """
    needle = normalize_text(name_or_id)
    if not needle:
        return None

    campuses = _load_campuses()
    for c in campuses:
        if normalize_text(c["id"]) == needle:
            return c
    for c in campuses:
        if normalize_text(c["name"]) == needle:
            return c
        aliases = c.get("aliases") if isinstance(c.get("aliases"), list) else []
        if any(normalize_text(a) == needle for a in aliases):
            return c
    return None
