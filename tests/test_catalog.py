# tests/test_catalog.py
import asyncio

import httpx
import pytest

from catalog import pathways
from catalog.campuses import find_campus, list_campuses
from catalog.normalize import normalize_text
from catalog.titles import search_titles
from conftest import make_client
from wizard.catalog import RoadmapCatalogBrowser

DATASET = [
    {"programName": "BA Economics", "institution": "UH Manoa", "totalCredits": "120"},
    {"programName": "AA Liberal Arts", "institution": "Leeward CC", "totalCredits": "60"},
]


def names(rows):
    return [r["programName"] for r in rows]


class TestBrowser:
    def test_search(self):
        b = RoadmapCatalogBrowser(pathways=DATASET)
        b.search_term = "econ"
        assert names(b.results()) == ["BA Economics"]

    def test_search_matches_institution(self):
        b = RoadmapCatalogBrowser(pathways=DATASET)
        b.search_term = "leeward"
        assert names(b.results()) == ["AA Liberal Arts"]

    def test_credits_band(self):
        b = RoadmapCatalogBrowser(pathways=DATASET)
        b.set_credits_filter("30to60")
        assert names(b.results()) == ["AA Liberal Arts"]
        b.set_credits_filter("gt60")
        assert names(b.results()) == ["BA Economics"]
        b.set_credits_filter("lt30")
        assert b.results() == []

    def test_sort_by_credits_desc(self):
        b = RoadmapCatalogBrowser(pathways=list(reversed(DATASET)))
        b.set_sort("credits", "desc")
        assert names(b.results()) == ["BA Economics", "AA Liberal Arts"]

    def test_sort_alpha(self):
        b = RoadmapCatalogBrowser(pathways=DATASET)
        b.set_sort("alpha")
        assert names(b.results()) == ["AA Liberal Arts", "BA Economics"]

    def test_degree_and_institution_filters(self):
        b = RoadmapCatalogBrowser(pathways=DATASET)
        assert b.degree_options() == ["AA", "BA"]
        assert b.institution_options() == ["Leeward CC", "UH Manoa"]
        b.degree_filter = "B.A."
        assert names(b.results()) == ["BA Economics"]
        b.clear_filters()
        b.institution_filter = "leeward"
        assert names(b.results()) == ["AA Liberal Arts"]

    def test_bad_controls_rejected(self):
        b = RoadmapCatalogBrowser(pathways=DATASET)
        with pytest.raises(ValueError):
            b.set_credits_filter("lots")
        with pytest.raises(ValueError):
            b.set_sort("popularity")

    def test_load_fetches_once(self):
        hits = []

        def handler(request):
            hits.append(request.url.path)
            return httpx.Response(200, json=DATASET)

        async def go():
            b = RoadmapCatalogBrowser(make_client(handler))
            await b.load()
            await b.load()
            return b

        b = asyncio.run(go())
        assert hits == ["/pathways"]
        assert len(b.results()) == 2


class TestDatasets:
    def test_titles_capped_and_cached(self):
        first = search_titles("er")
        assert 0 < len(first) <= 10
        assert search_titles("ER") == first

    def test_titles_short_query(self):
        assert search_titles("a") == []

    def test_campus_lookup_by_alias_and_id(self):
        assert find_campus("UH Manoa")["id"] == "uh_manoa"
        assert find_campus("uh_manoa")["id"] == "uh_manoa"
        assert find_campus("university of hawaii at manoa")["id"] == "uh_manoa"
        assert find_campus("Atlantis") is None

    def test_campus_list_sorted(self):
        rows = list_campuses()
        assert [r["name"] for r in rows] == sorted((r["name"] for r in rows), key=normalize_text)
        assert "PCATT" not in [r["name"] for r in rows]

    def test_pathway_match_order(self):
        templates = [{"program_name": "Computer Science, B.S."}, {"program_name": "Computer Science"}]
        assert pathways.find_matching_template("computer science", templates)["program_name"] == "Computer Science"
        assert pathways.find_matching_template("Computer Science, B.S. (Honors)", templates[:1])["program_name"] == "Computer Science, B.S."
        assert pathways.find_matching_template("Data Science", templates) is None

    def test_missing_pathway_file(self, monkeypatch, tmp_path):
        monkeypatch.setattr(pathways, "DATA_DIR", tmp_path)
        pathways.load_templates.cache_clear()
        try:
            with pytest.raises(pathways.PathwayDataError):
                pathways.load_templates()
        finally:
            monkeypatch.undo()
            pathways.load_templates.cache_clear()

    def test_single_object_file(self, monkeypatch, tmp_path):
        (tmp_path / "pathways.json").write_text(
            '{"program_name": "Solo, B.A.", "institution": "X", "total_credits": 120, "years": []}',
            encoding="utf-8",
        )
        monkeypatch.setattr(pathways, "DATA_DIR", tmp_path)
        pathways.load_templates.cache_clear()
        try:
            rows = pathways.list_pathways()
        finally:
            monkeypatch.undo()
            pathways.load_templates.cache_clear()
        assert rows == [{
            "id": 1,
            "programName": "Solo, B.A.",
            "institution": "X",
            "totalCredits": "120",
            "pathwayData": {"program_name": "Solo, B.A.", "institution": "X", "total_credits": 120, "years": []},
        }]
