# tests/test_autocomplete.py
import asyncio

import httpx

from conftest import make_client
from wizard.autocomplete import CareerAutocomplete, rank_suggestions
from wizard.form import FormStore

TITLES = [
    {"id": "15-1252.00", "code": "15-1252.00", "name": "Software Developers", "displayName": "Software Developers", "isAlternate": False},
    {"id": "15-1252.00", "code": "15-1252.00", "name": "Software Engineer", "displayName": "Software Engineer", "isAlternate": True},
]


def test_rank_prefers_exact_then_prefix_then_primary():
    items = [
        {"name": "Senior Software Engineer", "isAlternate": False},
        {"name": "Software Engineer", "isAlternate": True},
        {"name": "Software Engineers", "isAlternate": False},
    ]
    ranked = [i["name"] for i in rank_suggestions("software engineer", items)]
    assert ranked == ["Software Engineer", "Software Engineers", "Senior Software Engineer"]


class TestCareerAutocomplete:
    def _widget(self, handler, store=None):
        store = store or FormStore()
        return CareerAutocomplete(make_client(handler), store, debounce=0.01), store

    def test_results_published_after_debounce(self):
        queries = []

        def handler(request):
            queries.append(request.url.params["q"])
            return httpx.Response(200, json=TITLES)

        async def go():
            widget, store = self._widget(handler)
            widget.on_query_change("soft")
            await widget.settle()
            return widget, store

        widget, store = asyncio.run(go())
        assert queries == ["soft"]
        assert widget.is_open is True
        assert [s["name"] for s in widget.suggestions] == ["Software Developers", "Software Engineer"]
        assert store.form.career == "soft"
        assert store.form.career_validated is False

    def test_short_query_makes_no_request(self):
        def handler(request):
            raise AssertionError("no request expected")

        async def go():
            widget, _ = self._widget(handler)
            task = widget.on_query_change("s")
            await widget.settle()
            return widget, task

        widget, task = asyncio.run(go())
        assert task is None
        assert widget.suggestions == []
        assert widget.is_open is False

    def test_rapid_typing_only_searches_last_query(self):
        queries = []

        def handler(request):
            queries.append(request.url.params["q"])
            return httpx.Response(200, json=TITLES)

        async def go():
            widget, _ = self._widget(handler)
            widget.on_query_change("so")
            widget.on_query_change("sof")
            widget.on_query_change("soft")
            await widget.settle()

        asyncio.run(go())
        assert queries == ["soft"]

    def test_stale_response_is_discarded(self):
        async def go():
            release = asyncio.Event()

            async def slow_search(query):
                if query == "econ":
                    await release.wait()
                    return [{"id": "19-3011.00", "code": "19-3011.00", "name": "Economists", "isAlternate": False}]
                return [{"id": "29-1141.00", "code": "29-1141.00", "name": "Nurses", "isAlternate": False}]

            widget, _ = self._widget(lambda r: httpx.Response(500))
            widget.client.search_titles = slow_search

            first = widget.on_query_change("econ")
            await asyncio.sleep(0.05)
            # detach the in-flight search so the next keystroke cannot cancel it
            widget._task = None
            await widget.on_query_change("nurse")
            release.set()
            await first
            return widget

        widget = asyncio.run(go())
        assert [s["name"] for s in widget.suggestions] == ["Nurses"]

    def test_select_validates_and_closes(self):
        async def go():
            widget, store = self._widget(lambda r: httpx.Response(200, json=TITLES))
            widget.on_query_change("soft")
            await widget.settle()
            widget.select(widget.suggestions[1])
            return widget, store

        widget, store = asyncio.run(go())
        assert store.form.career == "Software Engineer"
        assert store.form.career_validated is True
        assert store.form.career_code == "15-1252.00"
        assert widget.is_open is False

    def test_backend_error_yields_no_suggestions(self):
        async def go():
            widget, _ = self._widget(lambda r: httpx.Response(503))
            widget.on_query_change("soft")
            await widget.settle()
            return widget

        widget = asyncio.run(go())
        assert widget.suggestions == []
        assert widget.is_open is False
        assert widget.loading is False

    def test_close_cancels_pending_search(self):
        def handler(request):
            raise AssertionError("cancelled search must not hit the network")

        async def go():
            widget, _ = self._widget(handler)
            task = widget.on_query_change("soft")
            widget.close()
            await asyncio.sleep(0.03)
            return task

        task = asyncio.run(go())
        assert task.cancelled()

    def test_suggestion_without_ids_cannot_validate(self):
        widget, store = self._widget(lambda r: httpx.Response(200, json=[]))
        store.edit_career("Chef")

        assert widget.select({"name": "Chef"}) is False
        assert store.form.career_validated is False
        assert store.form.career_id is None
        assert store.form.career_code is None

    def test_code_alone_fills_both_ids(self):
        widget, store = self._widget(lambda r: httpx.Response(200, json=[]))
        assert widget.select({"name": "Chefs and Head Cooks", "code": "35-1011.00"}) is True
        assert store.form.career_validated is True
        assert store.form.career_id == store.form.career_code == "35-1011.00"

    def test_results_without_ids_are_not_offered(self):
        rows = TITLES + [{"name": "Software Tinkerer", "isAlternate": True}]

        async def go():
            widget, _ = self._widget(lambda r: httpx.Response(200, json=rows))
            widget.on_query_change("soft")
            await widget.settle()
            return widget

        widget = asyncio.run(go())
        assert "Software Tinkerer" not in [s["name"] for s in widget.suggestions]
        assert len(widget.suggestions) == 2
