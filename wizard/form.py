# wizard/form.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class WizardForm:
    career: str = ""
    career_id: Optional[str] = None
    career_code: Optional[str] = None
    career_validated: bool = False
    college: str = ""
    program: str = ""
    interests: Tuple[str, ...] = field(default_factory=tuple)
    skills: Tuple[str, ...] = field(default_factory=tuple)

    def to_payload(self) -> Dict[str, Any]:
        """Body for POST /profiles."""
        return {
            "career": self.career,
            "careerId": self.career_id,
            "careerCode": self.career_code,
            "college": self.college,
            "program": self.program,
            "interests": list(self.interests),
            "skills": list(self.skills),
        }


def _unique(values) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(v for v in values if v))


Listener = Callable[[WizardForm], None]


class FormStore:
    """
    Single writer for one wizard session's form.

    Every change goes through `update` (or the career helpers built on it),
    so the coupled fields can never be observed half-updated:
      - typing career text drops the validated taxonomy pick
      - picking a new college clears the program
    """

    def __init__(self, form: Optional[WizardForm] = None):
        self._form = form or WizardForm()
        self._listeners: List[Listener] = []

    @property
    def form(self) -> WizardForm:
        return self._form

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def update(self, **changes: Any) -> WizardForm:
        cur = self._form

        if "career" in changes and "career_validated" not in changes:
            changes.update(career_id=None, career_code=None, career_validated=False)

        if "college" in changes and "program" not in changes:
            changes["program"] = ""

        for key in ("interests", "skills"):
            if key in changes:
                changes[key] = _unique(changes[key])

        self._form = replace(cur, **changes)
        for listener in list(self._listeners):
            listener(self._form)
        return self._form

    def edit_career(self, text: str) -> WizardForm:
        return self.update(career=text)

    def select_career(self, name: str, career_id: Optional[str], career_code: Optional[str]) -> WizardForm:
        return self.update(
            career=name,
            career_id=career_id,
            career_code=career_code,
            career_validated=True,
        )

    def reset(self) -> WizardForm:
        self._form = WizardForm()
        for listener in list(self._listeners):
            listener(self._form)
        return self._form
