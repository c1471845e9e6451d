# wizard/submitter.py
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Union

import httpx

from settings import REDIRECT_DELAY_SECONDS
from telemetry.logger import get_logger, log_event
from wizard.api_client import AdvisorClient, ApiError
from wizard.form import WizardForm

log = get_logger(__name__)

ROADMAPS_PATH = "/Roadmaps"

SAVE_FAILED_MESSAGE = "Failed to save profile. Please try again."
SAVED_MESSAGE = "Profile saved! Your personalized roadmap is ready."
NO_ROADMAP_MESSAGE = (
    "Profile saved, but we couldn't build a roadmap for it. "
    "This campus and major combination may not have a roadmap template yet."
)


@dataclass(frozen=True)
class Alert:
    level: str  # "success" | "warning" | "error"
    message: str
    blocking: bool = False


@dataclass(frozen=True)
class SubmitResult:
    accepted: bool
    roadmap_generated: bool = False
    profile_id: Optional[int] = None


Navigate = Callable[[str], Union[None, Awaitable[None]]]


class ProfileSubmitter:
    """
    Save step of the wizard: one POST per Save click, no retries.

    `saving` is true while the request is in flight; the Save control
    must be disabled while it is, and a second submit() during that time
    is ignored.
    """

    def __init__(
        self,
        client: AdvisorClient,
        *,
        navigate: Optional[Navigate] = None,
        redirect_delay: float = REDIRECT_DELAY_SECONDS,
    ):
        self.client = client
        self.navigate = navigate
        self.redirect_delay = redirect_delay

        self.saving = False
        self.alert: Optional[Alert] = None
        self.redirect_task: Optional[asyncio.Task] = None

    async def submit(self, form: WizardForm) -> Optional[SubmitResult]:
        if self.saving:
            return None

        self.saving = True
        self.alert = None
        try:
            data = await self.client.create_profile(form.to_payload())
        except (ApiError, httpx.HTTPError, ValueError) as e:
            log.error("profile save failed: %s", e)
            log_event("profile_save_failed", {"error": type(e).__name__})
            self.alert = Alert("error", SAVE_FAILED_MESSAGE, blocking=True)
            return SubmitResult(accepted=False)
        finally:
            self.saving = False

        has_roadmap = bool(data.get("hasRoadmap"))
        profile = data.get("profile")
        profile_id = profile.get("id") if isinstance(profile, dict) else None

        if has_roadmap:
            self.alert = Alert("success", SAVED_MESSAGE)
        else:
            reason = data.get("roadmapError")
            message = f"{NO_ROADMAP_MESSAGE} ({reason})" if reason else NO_ROADMAP_MESSAGE
            self.alert = Alert("warning", message)

        log_event("profile_saved", {"has_roadmap": has_roadmap})
        self.redirect_task = asyncio.get_running_loop().create_task(self._redirect())
        self.redirect_task.add_done_callback(self._redirect_done)
        return SubmitResult(accepted=True, roadmap_generated=has_roadmap, profile_id=profile_id)

    def cancel(self) -> None:
        """Leaving the wizard: drop a pending redirect."""
        if self.redirect_task is not None and not self.redirect_task.done():
            self.redirect_task.cancel()
        self.redirect_task = None

    @staticmethod
    def _redirect_done(task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log.error("redirect to %s failed: %r", ROADMAPS_PATH, exc)
            log_event("redirect_failed", {"error": type(exc).__name__})

    async def _redirect(self) -> None:
        await asyncio.sleep(self.redirect_delay)
        if self.navigate is None:
            return
        result = self.navigate(ROADMAPS_PATH)
        if asyncio.iscoroutine(result):
            await result
