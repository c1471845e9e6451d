# tests/conftest.py
import os
import tempfile
from pathlib import Path

# settings.py reads the environment at import time, so this runs first
_TMP = Path(tempfile.mkdtemp(prefix="advisor-tests-"))
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TMP / 'test.db'}"
os.environ["TELEMETRY_DB"] = str(_TMP / "telemetry.sqlite3")
os.environ["OPENAI_API_KEY"] = ""

import httpx
import pytest

from wizard.api_client import AdvisorClient


@pytest.fixture(autouse=True)
def _fresh_caches():
    from catalog import campuses, titles
    from core.rate_limit import generate_limiter
    from wizard.controller import clear_catalog_cache

    titles.clear_cache()
    campuses._CACHE.clear()
    clear_catalog_cache()
    generate_limiter.reset()
    yield


def make_client(handler, token=None) -> AdvisorClient:
    """AdvisorClient whose requests are answered by `handler(request)`."""
    http = httpx.AsyncClient(base_url="http://advisor.test", transport=httpx.MockTransport(handler))
    return AdvisorClient(token=token, http=http)
