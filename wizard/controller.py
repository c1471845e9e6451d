# wizard/controller.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from catalog.normalize import matches_normalized, normalize_text
from core.state_machine import (
    EDITABLE_STEPS,
    WizardStep,
    next_step,
    previous_step,
    step_is_valid,
)
from memory.ttl_cache import TTLCache
from settings import CATALOG_CACHE_TTL
from telemetry.logger import get_logger
from wizard import selection
from wizard.api_client import AdvisorClient, ApiError
from wizard.autocomplete import CareerAutocomplete
from wizard.form import FormStore, WizardForm
from wizard.generator import SuggestionGenerator
from wizard.submitter import ProfileSubmitter, SubmitResult

log = get_logger(__name__)

LABEL_KINDS = ("interests", "skills")

# Shared by every wizard session in the process. Written once per key,
# read many times; expiry is the only invalidation.
_CATALOG_CACHE: TTLCache[List[Any]] = TTLCache(CATALOG_CACHE_TTL)


def programs_for_college(pathways: List[Dict[str, Any]], college: str) -> List[str]:
    """Program names whose institution contains the college name (normalized)."""
    if not normalize_text(college):
        return []
    names = []
    for p in pathways:
        if not matches_normalized(p.get("institution"), college):
            continue
        name = p.get("programName") or p.get("program_name")
        if name and name not in names:
            names.append(name)
    return sorted(names, key=normalize_text)


def clear_catalog_cache() -> None:
    _CATALOG_CACHE.clear()


class WizardController:
    """
    Career -> College/Program -> Interests -> Skills -> Review -> Saved.

    The controller owns the step and (through its FormStore) the form.
    Transitions are synchronous; the only awaited I/O is data loading for
    a step and the final save.
    """

    def __init__(
        self,
        client: AdvisorClient,
        *,
        store: Optional[FormStore] = None,
        generator: Optional[SuggestionGenerator] = None,
        autocomplete: Optional[CareerAutocomplete] = None,
        submitter: Optional[ProfileSubmitter] = None,
        navigate=None,
    ):
        self.client = client
        self.store = store or FormStore()
        self.generator = generator or SuggestionGenerator(client)
        self.autocomplete = autocomplete or CareerAutocomplete(client, self.store)
        self.submitter = submitter or ProfileSubmitter(client, navigate=navigate)

        self.step = WizardStep.CAREER
        self.colleges: List[str] = []
        self.programs: List[str] = []
        self.load_error: Optional[str] = None

        self.generated: Dict[str, List[str]] = {k: [] for k in LABEL_KINDS}
        self.loading: Dict[str, bool] = {k: False for k in LABEL_KINDS}

    @property
    def form(self) -> WizardForm:
        return self.store.form

    # -----------------------
    # transitions
    # -----------------------
    @property
    def can_advance(self) -> bool:
        return self.step < WizardStep.REVIEW and step_is_valid(self.form, self.step)

    def next(self) -> WizardStep:
        # review -> saved only happens through save()
        if self.can_advance:
            self.step = next_step(self.step)
        return self.step

    def back(self) -> WizardStep:
        if self.step != WizardStep.SAVED:
            self.step = previous_step(self.step)
        return self.step

    def jump_to(self, step: int) -> WizardStep:
        """Edit link on the review screen."""
        if self.step != WizardStep.REVIEW:
            raise ValueError("jump_to is only available from the review step")
        if step not in EDITABLE_STEPS:
            raise ValueError(f"cannot jump to step {step}")
        self.step = WizardStep(step)
        return self.step

    def reset(self) -> None:
        """Leaving the wizard: everything but the shared catalog cache goes."""
        self.autocomplete.close()
        self.submitter.cancel()
        self.store.reset()
        self.step = WizardStep.CAREER
        self.programs = []
        self.load_error = None
        self.generated = {k: [] for k in LABEL_KINDS}
        self.loading = {k: False for k in LABEL_KINDS}

    # -----------------------
    # step 1: career
    # -----------------------
    def edit_career(self, text: str):
        return self.autocomplete.on_query_change(text)

    def choose_career(self, suggestion: Dict[str, Any]) -> WizardForm:
        self.autocomplete.select(suggestion)
        return self.form

    # -----------------------
    # step 2: college + program
    # -----------------------
    async def _cached(self, key: str, fetch) -> List[Any]:
        hit = _CATALOG_CACHE.get(key)
        if hit is not None:
            return hit
        value = await fetch()
        _CATALOG_CACHE.set(key, value)
        return value

    async def load_colleges(self) -> List[str]:
        async def fetch():
            campuses = await self.client.list_campuses()
            return [c["name"] for c in campuses if isinstance(c, dict) and c.get("name")]

        try:
            self.colleges = await self._cached("campuses", fetch)
            self.load_error = None
        except (ApiError, httpx.HTTPError, ValueError) as e:
            log.warning("could not load campuses: %s", e)
            self.colleges = []
            self.load_error = "Couldn't load colleges. Please try again."
        return self.colleges

    async def choose_college(self, college: str) -> List[str]:
        self.store.update(college=college)
        self.programs = []
        return await self.load_programs()

    async def load_programs(self) -> List[str]:
        college = self.form.college
        if not college:
            self.programs = []
            return self.programs

        key = f"programs:{normalize_text(college)}"
        try:
            pathways = await self._cached("pathways", self.client.list_pathways)
            programs = _CATALOG_CACHE.get(key)
            if programs is None:
                programs = programs_for_college(pathways, college)
                _CATALOG_CACHE.set(key, programs)
            self.load_error = None
        except (ApiError, httpx.HTTPError, ValueError) as e:
            log.warning("could not load programs for %r: %s", college, e)
            programs = []
            self.load_error = "Couldn't load programs. Please try again."

        # the college may have changed while we were waiting
        if self.form.college == college:
            self.programs = programs
        return self.programs

    def choose_program(self, program: str) -> WizardForm:
        return self.store.update(program=program)

    # -----------------------
    # steps 3-4: interests + skills
    # -----------------------
    def _context(self) -> Dict[str, Any]:
        f = self.form
        return {
            "career": f.career,
            "college": f.college,
            "program": f.program,
            "interests": list(f.interests),
        }

    def _selected(self, kind: str) -> List[str]:
        return list(getattr(self.form, kind))

    def all_selected(self, kind: str) -> bool:
        return selection.all_selected(self.generated[kind], self._selected(kind))

    def can_regenerate(self, kind: str) -> bool:
        return selection.can_regenerate(self.generated[kind], self._selected(kind), self.loading[kind])

    def regenerate_hint(self, kind: str) -> Optional[str]:
        return selection.REGENERATE_HINT if self.all_selected(kind) else None

    async def generate(self, kind: str) -> List[str]:
        if self.loading[kind]:
            return self.generated[kind]

        self.loading[kind] = True
        try:
            self.generated[kind] = await self.generator.generate(
                kind,
                self._context(),
                previous=self.generated[kind],
                selected=self._selected(kind),
            )
        finally:
            self.loading[kind] = False
        return self.generated[kind]

    async def ensure_generated(self, kind: str) -> List[str]:
        """First visit to a label step populates it; later visits keep the set."""
        if not self.generated[kind]:
            return await self.generate(kind)
        return self.generated[kind]

    async def regenerate(self, kind: str) -> List[str]:
        if not self.can_regenerate(kind):
            return self.generated[kind]
        return await self.generate(kind)

    def toggle(self, kind: str, label: str) -> WizardForm:
        return self.store.update(**{kind: selection.toggle(self._selected(kind), label)})

    def toggle_all(self, kind: str) -> WizardForm:
        return self.store.update(**{kind: selection.toggle_all(self.generated[kind], self._selected(kind))})

    async def generate_interests(self) -> List[str]:
        return await self.ensure_generated("interests")

    async def regenerate_interests(self) -> List[str]:
        return await self.regenerate("interests")

    def toggle_interest(self, label: str) -> WizardForm:
        return self.toggle("interests", label)

    def toggle_all_interests(self) -> WizardForm:
        return self.toggle_all("interests")

    async def generate_skills(self) -> List[str]:
        return await self.ensure_generated("skills")

    async def regenerate_skills(self) -> List[str]:
        return await self.regenerate("skills")

    def toggle_skill(self, label: str) -> WizardForm:
        return self.toggle("skills", label)

    def toggle_all_skills(self) -> WizardForm:
        return self.toggle_all("skills")

    # -----------------------
    # step 5: review + save
    # -----------------------
    def review(self) -> Dict[str, Any]:
        f = self.form
        return {
            "career": f.career,
            "college": f.college,
            "program": f.program,
            "interests": list(f.interests),
            "skills": list(f.skills),
        }

    @property
    def saving(self) -> bool:
        return self.submitter.saving

    async def save(self) -> Optional[SubmitResult]:
        if self.step != WizardStep.REVIEW:
            return None
        result = await self.submitter.submit(self.form)
        if result is not None and result.accepted:
            self.step = WizardStep.SAVED
        return result
