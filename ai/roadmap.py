# ai/roadmap.py
from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from catalog.campuses import find_campus
from catalog.pathways import find_matching_template, templates_for_institution


@dataclass
class RoadmapResult:
    roadmap: Optional[Dict[str, Any]]
    error: Optional[str] = None

    @property
    def generated(self) -> bool:
        return self.roadmap is not None


def _semester_credits(semester: Dict[str, Any]) -> int:
    declared = semester.get("credits")
    if isinstance(declared, (int, float)):
        return int(declared)
    return sum(int(c.get("credits") or 0) for c in semester.get("courses") or [])


def _build_years(template: Dict[str, Any]) -> List[Dict[str, Any]]:
    years = []
    for year in template.get("years") or []:
        semesters = []
        for sem in year.get("semesters") or []:
            semesters.append({
                "semester_name": sem.get("semester_name"),
                "credits": _semester_credits(sem),
                "courses": copy.deepcopy(sem.get("courses") or []),
            })
        years.append({"year_number": year.get("year_number"), "semesters": semesters})
    return years


def generate_roadmap(
    *,
    college: str,
    program: str,
    career: str = "",
    interests: Optional[List[str]] = None,
    skills: Optional[List[str]] = None,
) -> RoadmapResult:
    """
    Build a semester roadmap for a freshly saved profile from the pathway
    template of its college + program. A missing template is reported as
    an error string, not raised: the profile is still valid without one.
    """
    if not college or not program:
        return RoadmapResult(None, "Profile is missing required fields: college or program")

    campus = find_campus(college)
    if campus is None:
        return RoadmapResult(None, "Campus not found")

    institution = campus["name"]
    templates = templates_for_institution(institution)
    if not templates:
        return RoadmapResult(None, f"No roadmap templates are available for {institution} yet")

    template = find_matching_template(program, templates)
    if template is None:
        return RoadmapResult(
            None,
            f"No roadmap template matches {program} at {institution}; the campus/major combination may not be supported yet",
        )

    roadmap = {
        "program_name": template["program_name"],
        "institution": template.get("institution") or institution,
        "total_credits": template.get("total_credits"),
        "years": _build_years(template),
        "career_goal": career or None,
        "interests": list(interests or []),
        "skills": list(skills or []),
    }
    return RoadmapResult(roadmap)
