# tests/conftest.py

"""
Pytest Fixtures - Shared test configurations and data for the store, layout and API

SEED DATA ID REFERENCE (default geometry: top 15vh, usable 170vh):
- saint:         score 0.0,   count 3  → 15.0vh
- robin:         score 0.4,   count 2  → 83.0vh
- neutral:       score 0.5,   count 1  → 100.0vh
- neutral-twin:  score 0.505, count 1  → 100.85vh (collides with neutral)
- villain:       score 1.0,   count 2  → 185.0vh
"""

import pytest
from fastapi.testclient import TestClient

from app.core.dependencies import get_celebrity_repository
from app.main import app
from app.models.celebrity import CelebrityCreate, CelebrityRecord
from app.repositories.sqlite_repository import SQLiteCelebrityRepository
from app.timeline.layout import TimelineGeometry


SEED_CELEBRITIES = [
    {"id": "saint", "name": "Saint", "score": 0.0, "count": 3, "reason": "Always kind"},
    {"id": "robin", "name": "Robin", "score": 0.4, "count": 2, "reason": "Mostly good"},
    {"id": "neutral", "name": "Neutral", "score": 0.5, "count": 1, "reason": "Hard to say"},
    {"id": "neutral-twin", "name": "Neutral Twin", "score": 0.505, "count": 1, "reason": "Also hard to say"},
    {"id": "villain", "name": "Villain", "score": 1.0, "count": 2, "reason": "Always cruel"},
]


# =============================================================================
# CACHE ISOLATION
# =============================================================================

@pytest.fixture(autouse=True)
def no_redis(monkeypatch):
    """Run every test without Redis unless the test patches a cache in."""
    monkeypatch.setattr("app.services.cache.get_cache", lambda: None)
    monkeypatch.setattr("app.routers.celebrities.get_cache", lambda: None)


# =============================================================================
# STORE FIXTURES
# =============================================================================

@pytest.fixture
def empty_store(tmp_path):
    """SQLite store in a temporary file, no rows."""
    return SQLiteCelebrityRepository(str(tmp_path / "celebrities.db"))


@pytest.fixture
def store(empty_store):
    """SQLite store seeded with SEED_CELEBRITIES."""
    for entry in SEED_CELEBRITIES:
        empty_store.insert(CelebrityCreate(**entry))
    return empty_store


# =============================================================================
# FASTAPI TEST CLIENT FIXTURE
# =============================================================================

@pytest.fixture
def client(store):
    """TestClient with the store dependency pointed at the seeded SQLite store."""
    app.dependency_overrides[get_celebrity_repository] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# =============================================================================
# LAYOUT FIXTURES
# =============================================================================

@pytest.fixture
def geometry():
    """Default page geometry: 200vh page, 15vh margins, 2vh threshold, 10px stagger."""
    return TimelineGeometry()


@pytest.fixture
def make_celebrity():
    """Factory for in-memory records."""
    def _make(id: str, score, name: str = None, count: int = 1) -> CelebrityRecord:
        return CelebrityRecord(
            id=id,
            name=name or id.title(),
            score=score,
            count=count,
            reason=f"Reason for {id}",
        )
    return _make


@pytest.fixture
def sample_celebrities(make_celebrity):
    """SEED_CELEBRITIES as records, in seed order."""
    return [
        make_celebrity(e["id"], e["score"], name=e["name"], count=e["count"])
        for e in SEED_CELEBRITIES
    ]
