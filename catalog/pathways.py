# catalog/pathways.py
from __future__ import annotations

import json
from functools import lru_cache
from typing import Any, Dict, List, Optional

from settings import DATA_DIR
from catalog.normalize import normalize_text
from telemetry.logger import get_logger

log = get_logger(__name__)


class PathwayDataError(RuntimeError):
    pass


@lru_cache(maxsize=1)
def load_templates() -> List[Dict[str, Any]]:
    """
    Degree pathway templates: {program_name, institution, total_credits, years}.
    The file may hold a single template object or an array of them.
    """
    path = DATA_DIR / "pathways.json"
    if not path.exists():
        raise PathwayDataError(f"Pathway data file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            parsed = json.load(f)
    except ValueError as e:
        raise PathwayDataError(f"Invalid JSON in {path}: {e}") from e

    templates = parsed if isinstance(parsed, list) else [parsed]
    return [t for t in templates if isinstance(t, dict) and t.get("program_name")]


def _summary(index: int, p: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": index + 1,
        "programName": p["program_name"],
        "institution": p.get("institution") or "",
        "totalCredits": str(p.get("total_credits") or 0),
        "pathwayData": p,
    }


def list_pathways() -> List[Dict[str, Any]]:
    return [_summary(i, p) for i, p in enumerate(load_templates())]


def get_pathway(program_name: str) -> Optional[Dict[str, Any]]:
    for i, p in enumerate(load_templates()):
        if p["program_name"] == program_name:
            return _summary(i, p)
    return None


def templates_for_institution(institution: str) -> List[Dict[str, Any]]:
    needle = normalize_text(institution)
    return [t for t in load_templates() if needle and needle in normalize_text(t.get("institution"))]


def find_matching_template(program: str, templates: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Match a program name against templates:
      1) exact (normalized)
      2) template name contains the program
      3) program contains the template name
    """
    wanted = normalize_text(program)
    if not wanted:
        return None

    for t in templates:
        if normalize_text(t["program_name"]) == wanted:
            return t
    for t in templates:
        if wanted in normalize_text(t["program_name"]):
            return t
    for t in templates:
        name = normalize_text(t["program_name"])
        if name and name in wanted:
            return t
    return None
