# api/titles.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from catalog.titles import MIN_QUERY_LENGTH, search_titles

router = APIRouter(prefix="/titles", tags=["titles"])


@router.get("/autocomplete")
def autocomplete(
    q: Optional[str] = Query(default=None),
    query: Optional[str] = Query(default=None),
):
    """Career title suggestions; `q` and `query` are accepted interchangeably."""
    term = (q or query or "").strip()
    if len(term) < MIN_QUERY_LENGTH:
        raise HTTPException(status_code=400, detail="Query must be at least 2 characters")
    return search_titles(term)
