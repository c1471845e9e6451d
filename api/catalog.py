# api/catalog.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from catalog.campuses import list_campuses
from catalog.pathways import PathwayDataError, get_pathway, list_pathways
from telemetry.logger import get_logger

log = get_logger(__name__)

router = APIRouter(tags=["catalog"])


@router.get("/campuses")
def campuses():
    return list_campuses()


@router.get("/pathways")
def pathways(programName: Optional[str] = Query(default=None)):
    try:
        if programName:
            pathway = get_pathway(programName)
            if pathway is None:
                raise HTTPException(status_code=404, detail="Pathway not found")
            return pathway
        return list_pathways()
    except PathwayDataError as e:
        log.error("pathway data unavailable: %s", e)
        raise HTTPException(status_code=500, detail="Failed to load pathway data") from e
