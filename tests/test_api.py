import pytest
from fastapi.testclient import TestClient

from main import app

ARTICLE = (
    "According to a peer-reviewed study published in Nature, the new treatment is effective. "
    "However, some experts caution that more research is needed."
)


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["endpoints"]["analyze"] == "POST /analyze"


def test_health_reports_offline_fact_checking(client):
    body = client.get("/health").json()
    assert body["status"] == "healthy"
    assert body["components"]["fact_check"] == "offline"


def test_analyze_rejects_short_text(client):
    response = client.post("/analyze", json={"text": "Too short to judge."})
    assert response.status_code == 422


def test_analyze(client):
    response = client.post("/analyze", json={"text": ARTICLE, "url": "https://apnews.com/article"})
    assert response.status_code == 200
    body = response.json()
    assert 0 <= body["truth_percentage"] <= 100
    assert body["source_credibility"]["score"] == 98
    assert set(body["breakdown"]) == {"linguistic", "source", "fact_check", "claims", "sentiment"}

    metrics = client.get("/metrics").json()
    assert metrics["metrics"]["total_requests"] == 1
    assert metrics["cache"]["entries"] >= 1


def test_source_lookup(client):
    response = client.post("/source", json={"url": "reuters.com"})
    assert response.status_code == 200
    assert response.json()["score"] == 97


def test_source_lookup_rejects_unusable_url(client):
    response = client.post("/source", json={"url": "https://"})
    assert response.status_code == 422
    assert response.json()["error"] == "InvalidUrl"


def test_claims(client):
    response = client.post("/claims", json={"text": ARTICLE})
    assert response.status_code == 200
    assert response.json()["claims"] == [
        "According to a peer-reviewed study published in Nature, the new treatment is effective.",
        "However, some experts caution that more research is needed.",
    ]


def test_scan(client):
    text = "You won't believe it, the mainstream media is hiding this cure. The weather is mild today."
    response = client.post("/scan", json={"text": text})
    assert response.status_code == 200
    flagged = response.json()["flagged"]
    assert len(flagged) == 1
    assert flagged[0]["score"] == 50


def test_metrics_count_error_responses(client):
    client.post("/analyze", json={"text": "Too short to judge."})
    client.post("/source", json={"url": "https://"})
    client.post("/source", json={"url": "bbc.com"})

    stats = client.get("/metrics").json()["metrics"]
    assert stats["total_requests"] == 3
    assert stats["failed_requests"] == 2
    assert stats["fallback_results"] == 0
    assert stats["requests_by_path"] == {"/analyze": 1, "/source": 2}
