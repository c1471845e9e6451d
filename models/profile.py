# models/profile.py
from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import JSON, Column, DateTime, Integer, String, Index

from core.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(128), nullable=False, index=True)

    career = Column(String(255), nullable=False)
    # taxonomy identifiers from the autocomplete pick (optional)
    career_id = Column(String(64), nullable=True)
    career_code = Column(String(64), nullable=True)

    college = Column(String(255), nullable=False)
    program = Column(String(255), nullable=False)
    interests = Column(JSON, nullable=False, default=list)
    skills = Column(JSON, nullable=False, default=list)

    # filled by roadmap generation after the profile row exists
    roadmap = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "career": self.career,
            "careerId": self.career_id,
            "careerCode": self.career_code,
            "college": self.college,
            "program": self.program,
            "interests": list(self.interests or []),
            "skills": list(self.skills or []),
            "roadmap": self.roadmap,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

Index("ix_profiles_user_created", Profile.user_id, Profile.created_at)
