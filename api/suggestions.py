# api/suggestions.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from ai.suggestions import generate_labels
from core.rate_limit import generate_limiter

router = APIRouter(tags=["suggestions"])


# ----------------------------
# Request models
# ----------------------------
class InterestsRequest(BaseModel):
    career: str = ""
    college: Optional[str] = None
    program: Optional[str] = None
    degree: Optional[str] = None
    previousInterests: List[str] = Field(default_factory=list)
    selectedInterests: List[str] = Field(default_factory=list)


class SkillsRequest(BaseModel):
    career: str = ""
    college: Optional[str] = None
    program: Optional[str] = None
    degree: Optional[str] = None
    interests: List[str] = Field(default_factory=list)
    previousSkills: List[str] = Field(default_factory=list)
    selectedSkills: List[str] = Field(default_factory=list)


# ----------------------------
# Helpers
# ----------------------------
def _check_rate(request: Request, kind: str) -> None:
    ip = request.client.host if request.client else "unknown"
    key = f"generate:{ip}"
    if not generate_limiter.allow(key):
        raise HTTPException(
            status_code=429,
            detail=f"Too many {kind} requests. Try again shortly.",
            headers={"Retry-After": str(generate_limiter.retry_after(key))},
        )


def _context(req: BaseModel) -> Dict[str, Any]:
    career = (req.career or "").strip()
    if not career:
        raise HTTPException(status_code=400, detail="Career is required")
    return {
        "career": career,
        "college": req.college,
        "program": req.program,
        "degree": req.degree,
        "interests": list(getattr(req, "interests", []) or []),
    }


# ----------------------------
# Routes
# ----------------------------
@router.post("/interests/generate")
async def generate_interests(req: InterestsRequest, request: Request):
    context = _context(req)
    _check_rate(request, "interest")
    interests = await generate_labels(
        "interests",
        context,
        previous=req.previousInterests,
        selected=req.selectedInterests,
    )
    return {"interests": interests}


@router.post("/skills/generate")
async def generate_skills(req: SkillsRequest, request: Request):
    context = _context(req)
    _check_rate(request, "skill")
    skills = await generate_labels(
        "skills",
        context,
        previous=req.previousSkills,
        selected=req.selectedSkills,
    )
    return {"skills": skills}
