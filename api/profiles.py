# api/profiles.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from ai.roadmap import RoadmapResult, generate_roadmap
from core.auth_utils import get_current_user_id
from core.database import get_async_session
from memory import profile_store
from telemetry.logger import get_logger, log_event

log = get_logger(__name__)

router = APIRouter(prefix="/profiles", tags=["profiles"])

ROADMAP_FAILED_MESSAGE = "Roadmap generation failed"


class ProfileRequest(BaseModel):
    career: str = Field(min_length=1, max_length=200)
    careerId: Optional[str] = None
    careerCode: Optional[str] = None
    college: str = Field(min_length=1, max_length=200)
    program: str = Field(min_length=1, max_length=200)
    interests: List[str] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)


# -------------------------------
# Create (+ roadmap)
# -------------------------------
@router.post("", status_code=201)
async def create_profile(
    req: ProfileRequest,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
):
    if not req.career.strip() or not req.college.strip() or not req.program.strip():
        raise HTTPException(status_code=400, detail="career, college and program are required")

    profile = await profile_store.create_profile(session, user_id, req.model_dump())

    profile_id = profile.id
    # the profile row is committed; from here on a failure only costs the roadmap
    try:
        result = generate_roadmap(
            college=profile.college,
            program=profile.program,
            career=profile.career,
            interests=profile.interests,
            skills=profile.skills,
        )
        if result.generated:
            profile = await profile_store.set_roadmap(session, profile, result.roadmap)
        else:
            log.info("no roadmap for profile %s: %s", profile_id, result.error)
    except Exception as e:
        log.exception("roadmap generation failed for profile %s", profile_id)
        log_event("roadmap_failed", {"profile_id": profile_id, "error": type(e).__name__}, user_id=user_id)
        await session.rollback()
        await session.refresh(profile)
        result = RoadmapResult(None, ROADMAP_FAILED_MESSAGE)

    log_event(
        "profile_created",
        {"has_roadmap": result.generated, "interests": len(profile.interests), "skills": len(profile.skills)},
        user_id=user_id,
    )

    out = {"success": True, "profile": profile.to_dict(), "hasRoadmap": result.generated}
    if not result.generated:
        out["roadmapError"] = result.error
    return out


# -------------------------------
# Read / delete
# -------------------------------
@router.get("")
async def list_profiles(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
):
    profiles = await profile_store.list_profiles(session, user_id)
    return {"success": True, "profiles": [p.to_dict() for p in profiles]}


@router.get("/{profile_id}")
async def get_profile(
    profile_id: int,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
):
    profile = await profile_store.get_profile(session, user_id, profile_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return {"success": True, "profile": profile.to_dict()}


@router.delete("/{profile_id}")
async def delete_profile(
    profile_id: int,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
):
    deleted = await profile_store.delete_profile(session, user_id, profile_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Profile not found")
    log_event("profile_deleted", {"profile_id": profile_id}, user_id=user_id)
    return {"success": True}
