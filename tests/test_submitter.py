# tests/test_submitter.py
import asyncio

import httpx

from conftest import make_client
from wizard.form import WizardForm
from wizard.submitter import (
    NO_ROADMAP_MESSAGE,
    ROADMAPS_PATH,
    SAVE_FAILED_MESSAGE,
    SAVED_MESSAGE,
    ProfileSubmitter,
)

FORM = WizardForm(
    career="Economists",
    career_id="19-3011.00",
    career_code="19-3011.00",
    career_validated=True,
    college="University of Hawaiʻi at Mānoa",
    program="Economics, B.A.",
    interests=("Policy",),
    skills=("Stata",),
)


def _submit(handler, **kwargs):
    visited = []

    async def go():
        submitter = ProfileSubmitter(make_client(handler), navigate=visited.append, redirect_delay=0, **kwargs)
        result = await submitter.submit(FORM)
        if submitter.redirect_task is not None:
            await submitter.redirect_task
        return submitter, result

    submitter, result = asyncio.run(go())
    return submitter, result, visited


class TestOutcomes:
    def test_roadmap_ready(self):
        body = {"success": True, "profile": {"id": 3}, "hasRoadmap": True}
        submitter, result, visited = _submit(lambda r: httpx.Response(201, json=body))
        assert result.accepted and result.roadmap_generated
        assert result.profile_id == 3
        assert submitter.alert.level == "success"
        assert submitter.alert.message == SAVED_MESSAGE
        assert visited == [ROADMAPS_PATH]

    def test_saved_without_roadmap(self):
        body = {"success": True, "profile": {"id": 4}, "hasRoadmap": False, "roadmapError": "Campus not found"}
        submitter, result, visited = _submit(lambda r: httpx.Response(201, json=body))
        assert result.accepted and not result.roadmap_generated
        assert submitter.alert.level == "warning"
        assert submitter.alert.message.startswith(NO_ROADMAP_MESSAGE)
        assert "Campus not found" in submitter.alert.message
        assert visited == [ROADMAPS_PATH]

    def test_server_error_blocks(self):
        submitter, result, visited = _submit(lambda r: httpx.Response(500, json={"error": "boom"}))
        assert result.accepted is False
        assert submitter.alert.level == "error"
        assert submitter.alert.blocking is True
        assert submitter.alert.message == SAVE_FAILED_MESSAGE
        assert submitter.saving is False
        assert visited == []

    def test_transport_error_blocks(self):
        def handler(request):
            raise httpx.ConnectError("offline", request=request)

        submitter, result, visited = _submit(handler)
        assert result.accepted is False
        assert submitter.alert.blocking is True
        assert visited == []


def test_payload_sent():
    seen = {}

    def handler(request):
        import json

        seen["body"] = json.loads(request.content)
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(201, json={"success": True, "profile": {"id": 1}, "hasRoadmap": True})

    async def go():
        from wizard.api_client import AdvisorClient

        http = httpx.AsyncClient(base_url="http://advisor.test", transport=httpx.MockTransport(handler))
        submitter = ProfileSubmitter(AdvisorClient(token="tok", http=http), redirect_delay=0)
        await submitter.submit(FORM)

    asyncio.run(go())
    assert seen["body"] == FORM.to_payload()
    assert seen["auth"] == "Bearer tok"


def test_second_submit_while_saving_is_ignored():
    calls = []

    async def go():
        release = asyncio.Event()

        async def slow_create(body):
            calls.append(body)
            await release.wait()
            return {"success": True, "profile": {"id": 1}, "hasRoadmap": True}

        submitter = ProfileSubmitter(make_client(lambda r: httpx.Response(500)), redirect_delay=0)
        submitter.client.create_profile = slow_create

        first = asyncio.ensure_future(submitter.submit(FORM))
        await asyncio.sleep(0)
        assert submitter.saving is True
        second = await submitter.submit(FORM)
        release.set()
        return second, await first

    second, first = asyncio.run(go())
    assert second is None
    assert first.accepted is True
    assert len(calls) == 1


def test_non_dict_profile_in_reply():
    body = {"success": True, "profile": "saved", "hasRoadmap": True}
    submitter, result, visited = _submit(lambda r: httpx.Response(201, json=body))
    assert result.accepted is True
    assert result.profile_id is None
    assert visited == [ROADMAPS_PATH]


def test_failing_navigation_is_logged():
    from telemetry.logger import recent_events

    def navigate(path):
        raise RuntimeError("router gone")

    async def go():
        body = {"success": True, "profile": {"id": 1}, "hasRoadmap": True}
        client = make_client(lambda r: httpx.Response(201, json=body))
        submitter = ProfileSubmitter(client, navigate=navigate, redirect_delay=0)
        await submitter.submit(FORM)
        await asyncio.sleep(0.02)
        return submitter

    submitter = asyncio.run(go())
    assert submitter.redirect_task.done()
    assert any(e["event"] == "redirect_failed" for e in recent_events(10))


def test_cancel_without_pending_redirect():
    submitter = ProfileSubmitter(make_client(lambda r: httpx.Response(500)))
    submitter.cancel()
    assert submitter.redirect_task is None
