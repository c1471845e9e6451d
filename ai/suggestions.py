# ai/suggestions.py
from __future__ import annotations

import json
import re
from typing import Any, Awaitable, Callable, Dict, List, Optional

from ai import client as ai_client
from settings import SUGGESTION_TEMPERATURE
from telemetry.logger import get_logger, log_event

log = get_logger(__name__)

# -------------------------------------------------------------------
# Constants
# -------------------------------------------------------------------
MAX_LABELS = 5

FALLBACK_INTERESTS: List[str] = [
    "Problem Solving",
    "Innovation",
    "Leadership",
    "Communication",
    "Critical Thinking",
]

FALLBACK_SKILLS: List[str] = [
    "Problem Solving",
    "Communication",
    "Critical Thinking",
    "Teamwork",
    "Adaptability",
]

FALLBACKS: Dict[str, List[str]] = {
    "interests": FALLBACK_INTERESTS,
    "skills": FALLBACK_SKILLS,
}

_ARRAY_RE = re.compile(r"\[[\s\S]*\]")
_COMMENT_LINE_RE = re.compile(r"^\s*(//|#).*$", re.M)

CompleteFn = Callable[[str], Awaitable[str]]


# -------------------------------------------------------------------
# Budget + fallback
# -------------------------------------------------------------------
def labels_to_generate(selected: Optional[List[str]]) -> int:
    return MAX_LABELS - len(selected or [])


def fallback_labels(kind: str, count: int) -> List[str]:
    if count <= 0:
        return []
    return list(FALLBACKS[kind][:count])


# -------------------------------------------------------------------
# Prompt
# -------------------------------------------------------------------
_EXAMPLES = {
    "interests": '"Machine Learning", "Urban Planning", "Data Visualization"',
    "skills": '"Python Programming", "Data Analysis", "Project Management"',
}

_FOCUS = {
    "interests": "Mix technical areas, domain areas, and related fields that would benefit someone pursuing this career",
    "skills": "Mix technical skills, soft skills, and domain-specific competencies employers value for this career",
}


def _context_lines(kind: str, context: Dict[str, Any]) -> str:
    lines = [f"Career: {context.get('career')}"]
    for key, label in (("college", "College"), ("program", "Program"), ("degree", "Degree")):
        if context.get(key):
            lines.append(f"{label}: {context[key]}")
    if kind == "skills" and context.get("interests"):
        lines.append(f"Interests: {', '.join(context['interests'])}")
    return "\n".join(lines)


def build_prompt(kind: str, context: Dict[str, Any], count: int, previous: Optional[List[str]] = None) -> str:
    singular = kind[:-1]
    exclude = ""
    if previous:
        listed = "\n".join(f"- {p}" for p in previous)
        exclude = (
            f"\n\nIMPORTANT: Do NOT include any of these previously suggested {kind}:\n{listed}\n\n"
            f"You must suggest completely NEW and DIFFERENT {kind} that are still relevant to the career path."
        )

    return (
        f"Based on the following career path information, generate exactly {count} NEW and DIFFERENT "
        f"relevant {kind} for this career and academic background. "
        f"Return ONLY a JSON array of {singular} strings, nothing else.\n\n"
        f"{_context_lines(kind, context)}{exclude}\n\n"
        "Requirements:\n"
        f"- {kind.capitalize()} should be specific and actionable (e.g., {_EXAMPLES[kind]})\n"
        f"- {_FOCUS[kind]}\n"
        "- Keep each one short, 2-4 words\n"
        "- Generate DIVERSE options to give the user fresh choices\n\n"
        f'Return format: ["{singular.capitalize()} 1", "{singular.capitalize()} 2"]'
    )


# -------------------------------------------------------------------
# Parsing
# -------------------------------------------------------------------
def parse_labels(text: Optional[str], limit: int = MAX_LABELS) -> Optional[List[str]]:
    """
    Best-effort extraction of a JSON string array from LLM output.
    Tolerates prose around the array and comment lines inside it.
    Returns None when nothing usable came back.
    """
    if not text or limit <= 0:
        return None

    match = _ARRAY_RE.search(text)
    candidate = match.group(0) if match else text
    candidate = _COMMENT_LINE_RE.sub("", candidate)

    try:
        parsed = json.loads(candidate)
    except ValueError:
        return None

    if not isinstance(parsed, list):
        return None

    labels = [item.strip() for item in parsed if isinstance(item, str) and item.strip()]
    return labels[:limit] or None


# -------------------------------------------------------------------
# Public API
# -------------------------------------------------------------------
async def generate_labels(
    kind: str,
    context: Dict[str, Any],
    *,
    previous: Optional[List[str]] = None,
    selected: Optional[List[str]] = None,
    complete: Optional[CompleteFn] = None,
) -> List[str]:
    """
    Returns selected + (5 - len(selected)) new labels.

    - nothing to generate: selected is returned unchanged, no LLM call
    - LLM error or unusable reply: fixed fallback list fills the slots
    """
    if kind not in FALLBACKS:
        raise ValueError(f"unknown label kind: {kind}")

    selected = list(selected or [])
    count = labels_to_generate(selected)
    if count <= 0:
        return selected

    prompt = build_prompt(kind, context, count, previous)
    complete = complete or _default_complete

    try:
        text = await complete(prompt)
    except Exception as e:
        log.warning("%s generation failed: %s", kind, e)
        log_event("suggestions_fallback", {"kind": kind, "reason": "llm_error", "count": count})
        return selected + fallback_labels(kind, count)

    labels = parse_labels(text, count)
    if labels is None:
        log.warning("could not parse %s from LLM reply: %r", kind, (text or "")[:200])
        log_event("suggestions_fallback", {"kind": kind, "reason": "parse_error", "count": count})
        return selected + fallback_labels(kind, count)

    log_event("suggestions_generated", {"kind": kind, "requested": count, "returned": len(labels)})
    return selected + labels


async def _default_complete(prompt: str) -> str:
    return await ai_client.complete_prompt(prompt, temperature=SUGGESTION_TEMPERATURE)
