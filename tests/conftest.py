"""
Shared fixtures for Smart Search tests
"""
from datetime import datetime, timedelta, timezone

import pytest

from smart_search.models.records import CandidateRecord
from smart_search.services.sources import SourceRegistry, reset_registry
from smart_search.utils.storage import MemoryStore


NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def make_record(**overrides) -> CandidateRecord:
    """Build a record with sensible defaults, created 60 days before NOW"""
    data = {
        "id": 1,
        "firstName": "Ada",
        "lastName": "Lovelace",
        "title": None,
        "org": None,
        "email": None,
        "warmth": 0,
        "source": None,
        "tags": [],
        "createdAt": NOW - timedelta(days=60),
    }
    data.update(overrides)
    return CandidateRecord.model_validate(data)


@pytest.fixture
def now():
    return NOW


@pytest.fixture(autouse=True)
def memory_registry():
    """Isolate custom sources in memory for every test"""
    registry = SourceRegistry(MemoryStore())
    reset_registry(registry)
    yield registry
    reset_registry(None)
