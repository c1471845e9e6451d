# core/state_machine.py
from __future__ import annotations

from enum import IntEnum
from typing import Any, Callable, Dict


class WizardStep(IntEnum):
    CAREER = 1
    COLLEGE = 2
    INTERESTS = 3
    SKILLS = 4
    REVIEW = 5
    SAVED = 6


FIRST_STEP = WizardStep.CAREER
LAST_STEP = WizardStep.SAVED

# steps the review screen can send the user back to
EDITABLE_STEPS = (WizardStep.COLLEGE, WizardStep.INTERESTS, WizardStep.SKILLS)


_VALIDITY: Dict[WizardStep, Callable[[Any], bool]] = {
    WizardStep.CAREER: lambda form: bool(form.career_validated),
    WizardStep.COLLEGE: lambda form: bool(form.college) and bool(form.program),
    WizardStep.INTERESTS: lambda form: len(form.interests) > 0,
    WizardStep.SKILLS: lambda form: len(form.skills) > 0,
    WizardStep.REVIEW: lambda form: True,
}


def step_is_valid(form: Any, step: int) -> bool:
    """
    Gate for leaving `step` forward. The saved step has no way forward.
    """
    check = _VALIDITY.get(WizardStep(step))
    return bool(check and check(form))


def next_step(step: int) -> WizardStep:
    return WizardStep(min(int(LAST_STEP), int(step) + 1))


def previous_step(step: int) -> WizardStep:
    return WizardStep(max(int(FIRST_STEP), int(step) - 1))
