from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config import settings
from app.core.geo import Candidate, GeoPoint
from app.dependencies.rate_limit import rate_limit
from app.main import app
from app.services.static_data import reset_static_cache

DATA_PATH = Path(__file__).resolve().parents[1] / "data" / "biergarten_data.json"

MARIENPLATZ = GeoPoint(48.1351, 11.5820)


async def override_rate_limit():
    return None


@pytest_asyncio.fixture
async def client():
    app.dependency_overrides[rate_limit] = override_rate_limit
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides = {}


@pytest.fixture
def static_data(monkeypatch):
    monkeypatch.setattr(settings, "BIERGARTEN_DATA_PATH", str(DATA_PATH))
    reset_static_cache()
    yield DATA_PATH
    reset_static_cache()


@pytest.fixture
def candidates():
    return [
        Candidate(point=GeoPoint(48.14, 11.58), name="A", cost="€€", rating=4.5),
        Candidate(point=GeoPoint(48.10, 11.50), name="B", cost="€", rating=3.9),
    ]
