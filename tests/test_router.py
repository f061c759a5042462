"""
Tests for the HTTP surface
"""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from smart_search.main import app


@pytest.fixture
def client():
    return TestClient(app)


def _record(record_id, **fields):
    data = {
        "id": record_id,
        "firstName": "Ada",
        "lastName": "Lovelace",
        "warmth": 0,
        "createdAt": (datetime.now(timezone.utc) - timedelta(days=90)).isoformat(),
    }
    data.update(fields)
    return data


def test_health(client):
    """Health endpoint reports the service"""
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["service"] == "smart-search"


def test_smart_search_endpoint(client):
    """Orgs default to those on the records"""
    records = [
        _record(1, org="Blackstone", title="Partner"),
        _record(2, firstName="Grace", lastName="Hopper", org="Apollo", title="Partner"),
    ]

    response = client.post("/v1/search/smart", json={"query": "partners at Apollo", "records": records})

    assert response.status_code == 200
    body = response.json()
    assert [i["type"] for i in body["parsed"]["intents"]] == ["company", "role"]
    assert body["results"][0]["recordId"] == 2
    assert body["results"][0]["score"] == 100
    assert body["queryId"]


def test_smart_search_rejects_blank_query(client):
    """Blank queries are a client error"""
    response = client.post("/v1/search/smart", json={"query": "   ", "records": []})

    assert response.status_code == 400
    assert response.json()["detail"] == "Query is required"


def test_filter_endpoint(client):
    """Classifier payloads are validated then applied"""
    payload = {
        "classifier": {
            "filters": {"company": "Blackstone", "warmth": [2, 3]},
            "explanation": "Engaged Blackstone contacts",
            "intents": [{"type": "company", "label": "Company: Blackstone"}],
        },
        "records": [
            _record(1, org="Blackstone Group", warmth=2),
            _record(2, org="Blackstone Group", warmth=0),
        ],
    }

    response = client.post("/v1/search/filters", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["explanation"] == "Engaged Blackstone contacts"
    assert [r["recordId"] for r in body["results"]] == [1]
    assert body["results"][0]["score"] == 120


def test_filter_endpoint_rejects_bad_classifier_payload(client):
    """Malformed classifier output surfaces as a gateway error"""
    response = client.post("/v1/search/filters", json={"classifier": {"explanation": "oops"}, "records": []})

    assert response.status_code == 502


def test_sources_endpoints(client):
    """Custom sources are appended once"""
    initial = client.get("/v1/sources").json()["sources"]

    added = client.post("/v1/sources", json={"name": "Podcast", "category": "digital"}).json()
    duplicate = client.post("/v1/sources", json={"name": "linkedin", "category": "digital"}).json()

    assert added["added"] is True
    assert added["sources"][-1]["name"] == "Podcast"
    assert duplicate["added"] is False
    assert len(duplicate["sources"]) == len(initial) + 1


def test_categories_endpoint(client):
    """Category metadata is listed in fixed order"""
    categories = client.get("/v1/sources/categories").json()

    assert [c["value"] for c in categories] == [
        "relationship", "event", "digital", "outbound", "inbound", "other"
    ]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
