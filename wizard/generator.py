# wizard/generator.py
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import httpx

from ai.suggestions import MAX_LABELS, fallback_labels, labels_to_generate
from telemetry.logger import get_logger
from wizard.api_client import AdvisorClient, ApiError

log = get_logger(__name__)


def _valid_labels(data: Any, key: str) -> Optional[List[str]]:
    if not isinstance(data, dict):
        return None
    labels = data.get(key)
    if not isinstance(labels, list) or not all(isinstance(x, str) and x.strip() for x in labels):
        return None
    return [x.strip() for x in labels]


class SuggestionGenerator:
    """
    Wizard side of interest/skill generation.

    The backend already falls back when the LLM misbehaves; this class
    covers the case where the backend itself can't be reached or answers
    with an error, using the same fixed fallback lists.
    """

    def __init__(self, client: AdvisorClient):
        self.client = client

    async def generate(
        self,
        kind: str,
        context: Dict[str, Any],
        previous: Sequence[str] = (),
        selected: Sequence[str] = (),
    ) -> List[str]:
        selected = list(selected)
        count = labels_to_generate(selected)
        if count <= 0:
            return selected

        if kind == "interests":
            body = {
                "career": context.get("career") or "",
                "college": context.get("college") or None,
                "program": context.get("program") or None,
                "previousInterests": list(previous),
                "selectedInterests": selected,
            }
            call = self.client.generate_interests
        elif kind == "skills":
            body = {
                "career": context.get("career") or "",
                "college": context.get("college") or None,
                "program": context.get("program") or None,
                "interests": list(context.get("interests") or []),
                "previousSkills": list(previous),
                "selectedSkills": selected,
            }
            call = self.client.generate_skills
        else:
            raise ValueError(f"unknown label kind: {kind}")

        try:
            data = await call(body)
        except (ApiError, httpx.HTTPError, ValueError) as e:
            log.warning("%s generation request failed, using fallback: %s", kind, e)
            return selected + fallback_labels(kind, count)

        labels = _valid_labels(data, kind)
        if not labels:
            log.warning("%s generation returned an unusable body, using fallback", kind)
            return selected + fallback_labels(kind, count)
        return labels[:MAX_LABELS]

    async def interests(self, context: Dict[str, Any], previous: Sequence[str] = (), selected: Sequence[str] = ()) -> List[str]:
        return await self.generate("interests", context, previous, selected)

    async def skills(self, context: Dict[str, Any], previous: Sequence[str] = (), selected: Sequence[str] = ()) -> List[str]:
        return await self.generate("skills", context, previous, selected)
