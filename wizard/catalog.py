# wizard/catalog.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from catalog.normalize import degree_of, normalize_text, parse_credits
from wizard.api_client import AdvisorClient

CREDIT_FILTERS = ("any", "lt30", "30to60", "gt60")
SORT_KEYS = ("", "credits", "alpha")
SORT_DIRECTIONS = ("asc", "desc")


def program_name(p: Dict[str, Any]) -> str:
    return str(p.get("programName") or p.get("program_name") or "")


def total_credits(p: Dict[str, Any]) -> float:
    value = p.get("totalCredits")
    if value is None:
        value = p.get("total_credits")
    return parse_credits(value)


def _credits_ok(credits: float, band: str) -> bool:
    if band == "lt30":
        return credits < 30
    if band == "30to60":
        return 30 <= credits <= 60
    if band == "gt60":
        return credits > 60
    return True


class RoadmapCatalogBrowser:
    """
    Search / filter / sort over the full pathway list, all client-side.
    The list is fetched once; every results() call recomputes from it.
    """

    def __init__(self, client: Optional[AdvisorClient] = None, pathways: Optional[List[Dict[str, Any]]] = None):
        self.client = client
        self.pathways: List[Dict[str, Any]] = list(pathways or [])
        self.loaded = pathways is not None

        self.search_term = ""
        self.institution_filter = ""
        self.credits_filter = "any"
        self.degree_filter = ""
        self.sort_by = ""
        self.sort_dir = "asc"

    async def load(self) -> List[Dict[str, Any]]:
        if not self.loaded:
            if self.client is None:
                raise RuntimeError("RoadmapCatalogBrowser has no client to load from")
            self.pathways = await self.client.list_pathways()
            self.loaded = True
        return self.pathways

    # -----------------------
    # filter controls
    # -----------------------
    def set_credits_filter(self, band: str) -> None:
        if band not in CREDIT_FILTERS:
            raise ValueError(f"unknown credits filter: {band}")
        self.credits_filter = band

    def set_sort(self, sort_by: str, sort_dir: str = "asc") -> None:
        if sort_by not in SORT_KEYS:
            raise ValueError(f"unknown sort key: {sort_by}")
        if sort_dir not in SORT_DIRECTIONS:
            raise ValueError(f"unknown sort direction: {sort_dir}")
        self.sort_by = sort_by
        self.sort_dir = sort_dir

    def clear_filters(self) -> None:
        self.search_term = ""
        self.institution_filter = ""
        self.credits_filter = "any"
        self.degree_filter = ""
        self.sort_by = ""
        self.sort_dir = "asc"

    def institution_options(self) -> List[str]:
        names = {str(p.get("institution") or "") for p in self.pathways}
        return sorted((n for n in names if n), key=normalize_text)

    def degree_options(self) -> List[str]:
        return sorted({d for d in (degree_of(program_name(p)) for p in self.pathways) if d})

    # -----------------------
    # results
    # -----------------------
    def results(self) -> List[Dict[str, Any]]:
        term = normalize_text(self.search_term)
        institution = normalize_text(self.institution_filter)
        degree = self.degree_filter.replace(".", "").upper().strip()

        rows = []
        for p in self.pathways:
            name = normalize_text(program_name(p))
            inst = normalize_text(p.get("institution"))
            if term and term not in name and term not in inst:
                continue
            if institution and institution not in inst:
                continue
            if not _credits_ok(total_credits(p), self.credits_filter):
                continue
            if degree and degree_of(program_name(p)) != degree:
                continue
            rows.append(p)

        reverse = self.sort_dir == "desc"
        if self.sort_by == "credits":
            rows.sort(key=lambda p: total_credits(p), reverse=reverse)
        elif self.sort_by == "alpha":
            rows.sort(key=lambda p: (normalize_text(program_name(p)), program_name(p)), reverse=reverse)
        return rows
