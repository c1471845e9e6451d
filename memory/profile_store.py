# memory/profile_store.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from models.profile import Profile


def _clean_labels(values: Any) -> List[str]:
    if not isinstance(values, list):
        return []
    out: List[str] = []
    for v in values:
        if isinstance(v, str) and v.strip() and v.strip() not in out:
            out.append(v.strip())
    return out


async def create_profile(session: AsyncSession, user_id: str, data: Dict[str, Any]) -> Profile:
    """
    Insert a new profile row. Profiles are never edited in place by the
    wizard; a second save creates a second profile.
    """
    profile = Profile(
        user_id=str(user_id),
        career=(data.get("career") or "").strip(),
        career_id=data.get("careerId") or None,
        career_code=data.get("careerCode") or None,
        college=(data.get("college") or "").strip(),
        program=(data.get("program") or "").strip(),
        interests=_clean_labels(data.get("interests")),
        skills=_clean_labels(data.get("skills")),
    )
    session.add(profile)
    await session.commit()
    await session.refresh(profile)
    return profile


async def set_roadmap(session: AsyncSession, profile: Profile, roadmap: Optional[Dict[str, Any]]) -> Profile:
    profile.roadmap = roadmap
    await session.commit()
    await session.refresh(profile)
    return profile


async def list_profiles(session: AsyncSession, user_id: str) -> List[Profile]:
    result = await session.execute(
        select(Profile)
        .where(Profile.user_id == str(user_id))
        .order_by(Profile.created_at.desc(), Profile.id.desc())
    )
    return list(result.scalars().all())


async def get_profile(session: AsyncSession, user_id: str, profile_id: int) -> Optional[Profile]:
    result = await session.execute(
        select(Profile).where(Profile.id == profile_id, Profile.user_id == str(user_id))
    )
    return result.scalars().first()


async def delete_profile(session: AsyncSession, user_id: str, profile_id: int) -> bool:
    profile = await get_profile(session, user_id, profile_id)
    if profile is None:
        return False
    await session.delete(profile)
    await session.commit()
    return True
