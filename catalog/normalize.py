# catalog/normalize.py
from __future__ import annotations

import re
import unicodedata
from typing import Any, Optional

# ʻokina and the apostrophe variants people type instead of it
_OKINA_RE = re.compile(r"[ʻʼ'‘’`]")
_PUNCT_RE = re.compile(r"[^a-z0-9\s]+")
_SPACE_RE = re.compile(r"\s+")

# "B.S.", "A.A.S." etc. as they appear at the end of program names
_DEGREE_RE = re.compile(r"(?<![A-Za-z])((?:[A-Z]\.){2,4}|AAS|MBA|PhD|[AB][AS]|M[AS])(?![A-Za-z])")


def normalize_text(text: Optional[str]) -> str:
    """
    Lowercase, drop diacritics and ʻokina, collapse punctuation/whitespace.

      "University of Hawaiʻi at Mānoa" -> "university of hawaii at manoa"
      "Computer Science, B.S."         -> "computer science b s"
    """
    if not text:
        return ""
    s = unicodedata.normalize("NFKD", str(text))
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    s = _OKINA_RE.sub("", s.lower())
    s = _PUNCT_RE.sub(" ", s)
    return _SPACE_RE.sub(" ", s).strip()


def matches_normalized(value: Optional[str], term: Optional[str]) -> bool:
    needle = normalize_text(term)
    if not needle:
        return True
    return needle in normalize_text(value)


def parse_credits(value: Any) -> float:
    """Numeric credits; anything unparseable counts as 0."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    m = re.search(r"-?\d+(?:\.\d+)?", str(value or ""))
    return float(m.group(0)) if m else 0.0


def degree_of(program_name: Optional[str]) -> str:
    """
    Degree marker of a program name without dots, or "" if none.

      "Computer Science, B.S." -> "BS"
      "BA Economics"           -> "BA"
    """
    m = _DEGREE_RE.search(program_name or "")
    if not m:
        return ""
    return m.group(1).replace(".", "").upper()
