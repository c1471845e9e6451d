# wizard/autocomplete.py
from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional, Tuple

import httpx

from settings import AUTOCOMPLETE_DEBOUNCE_SECONDS
from telemetry.logger import get_logger
from wizard.api_client import AdvisorClient, ApiError
from wizard.form import FormStore

log = get_logger(__name__)

MIN_QUERY_LENGTH = 2


def rank_suggestions(query: str, items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    exact match > prefix match > substring match; primary titles before
    alternates; shorter names first. Stable for ties.
    """
    q = (query or "").strip().lower()

    def key(item: Dict[str, Any]):
        name = str(item.get("displayName") or item.get("name") or "").lower()
        if name == q:
            tier = 0
        elif name.startswith(q):
            tier = 1
        else:
            tier = 2
        return (tier, bool(item.get("isAlternate")), len(name))

    return sorted(items, key=key)


def _taxonomy_ids(item: Dict[str, Any]) -> Optional[Tuple[str, str]]:
    """(id, code) of a title suggestion; either one stands in for the other."""
    career_id = str(item.get("id") or item.get("code") or "").strip()
    career_code = str(item.get("code") or item.get("id") or "").strip()
    if not career_id or not career_code:
        return None
    return career_id, career_code


class CareerAutocomplete:
    """
    Debounced title search for the career step.

    Each keystroke bumps a sequence number and cancels the pending search;
    a finished search only publishes if its number is still the latest,
    so a slow stale reply can never overwrite a newer one.
    """

    def __init__(
        self,
        client: AdvisorClient,
        store: FormStore,
        *,
        debounce: float = AUTOCOMPLETE_DEBOUNCE_SECONDS,
    ):
        self.client = client
        self.store = store
        self.debounce = debounce

        self.suggestions: List[Dict[str, Any]] = []
        self.is_open = False
        self.loading = False

        self._seq = 0
        self._task: Optional[asyncio.Task] = None

    # -----------------------
    # input events
    # -----------------------
    def on_query_change(self, text: str) -> Optional[asyncio.Task]:
        """Manual edit of the career field."""
        self.store.edit_career(text)
        self._cancel_pending()

        query = (text or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            self._clear()
            return None

        seq = self._seq
        self._task = asyncio.get_running_loop().create_task(self._run(query, seq))
        return self._task

    def select(self, suggestion: Dict[str, Any]) -> bool:
        """
        Apply a picked suggestion. A suggestion without a title or taxonomy
        id cannot validate the career and is ignored.
        """
        ids = _taxonomy_ids(suggestion)
        name = suggestion.get("displayName") or suggestion.get("name")
        if ids is None or not name:
            log.warning("ignoring suggestion without title or taxonomy id: %r", suggestion)
            return False

        self._cancel_pending()
        self.store.select_career(name, career_id=ids[0], career_code=ids[1])
        self._clear()
        return True

    def close(self) -> None:
        """Teardown: drop pending work and hide the list."""
        self._cancel_pending()
        self._clear()

    async def settle(self) -> None:
        """Wait for the pending search, if any, to finish or be cancelled."""
        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    # -----------------------
    # internals
    # -----------------------
    def _cancel_pending(self) -> None:
        self._seq += 1
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self.loading = False

    def _clear(self) -> None:
        self.suggestions = []
        self.is_open = False
        self.loading = False

    async def _run(self, query: str, seq: int) -> None:
        await asyncio.sleep(self.debounce)
        if seq != self._seq:
            return

        self.loading = True
        results = await self._search(query)
        if seq != self._seq:
            return

        self.suggestions = rank_suggestions(query, results)
        self.is_open = bool(self.suggestions)
        self.loading = False

    async def _search(self, query: str) -> List[Dict[str, Any]]:
        try:
            items = await self.client.search_titles(query)
        except (ApiError, httpx.HTTPError, ValueError) as e:
            log.warning("title search failed for %r: %s", query, e)
            return []
        return [
            i for i in items
            if isinstance(i, dict) and (i.get("displayName") or i.get("name")) and _taxonomy_ids(i)
        ]
