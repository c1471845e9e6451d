# wizard/api_client.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from settings import ADVISOR_API_BASE


class ApiError(Exception):
    """Non-2xx reply from the advisor backend."""

    def __init__(self, status_code: int, body: Any = None):
        super().__init__(f"advisor API returned {status_code}")
        self.status_code = status_code
        self.body = body


class AdvisorClient:
    """
    Async client for the endpoints the wizard consumes.
    Every method raises ApiError on non-2xx and lets httpx errors through;
    each wizard component decides how to recover.
    """

    def __init__(
        self,
        base_url: str = ADVISOR_API_BASE,
        *,
        token: Optional[str] = None,
        http: Optional[httpx.AsyncClient] = None,
        timeout: float = 15.0,
    ):
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self._headers = headers

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "AdvisorClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    # -----------------------
    # plumbing
    # -----------------------
    @staticmethod
    def _json_or_text(resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError:
            return resp.text

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        resp = await self._http.request(method, path, headers=self._headers, **kwargs)
        if resp.status_code >= 400:
            raise ApiError(resp.status_code, self._json_or_text(resp))
        return resp

    # -----------------------
    # endpoints
    # -----------------------
    async def search_titles(self, query: str) -> List[Dict[str, Any]]:
        resp = await self._request("GET", "/titles/autocomplete", params={"q": query})
        data = resp.json()
        return data if isinstance(data, list) else []

    async def list_campuses(self) -> List[Dict[str, Any]]:
        resp = await self._request("GET", "/campuses")
        data = resp.json()
        return data if isinstance(data, list) else []

    async def list_pathways(self) -> List[Dict[str, Any]]:
        resp = await self._request("GET", "/pathways")
        data = resp.json()
        return data if isinstance(data, list) else []

    async def generate_interests(self, body: Dict[str, Any]) -> Any:
        resp = await self._request("POST", "/interests/generate", json=body)
        return resp.json()

    async def generate_skills(self, body: Dict[str, Any]) -> Any:
        resp = await self._request("POST", "/skills/generate", json=body)
        return resp.json()

    async def create_profile(self, body: Dict[str, Any]) -> Dict[str, Any]:
        resp = await self._request("POST", "/profiles", json=body)
        data = resp.json()
        return data if isinstance(data, dict) else {}
