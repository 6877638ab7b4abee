"""
Тесты HTTP API через FastAPI TestClient.

LLM не вызывается: клиент генерации оркестратора подменён ScriptedClient.
"""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from src.application.ai_services.schemas import TaskType
from src.infrastructure.config.settings import Settings
from src.main import create_app
from src.shared.exceptions.infrastructure_exceptions import GenerationUnavailable
from tests.fakes import ScriptedClient

API = "/api/v1"


@pytest.fixture
def app():
    return create_app(Settings(
        openai_api_key="sk-test-0000000000000000",
        batch_delay_seconds=0,
        rate_limit_per_minute=6000,
        rate_limit_burst=100,
    ))


@pytest.fixture
def scripted(app):
    client = ScriptedClient()
    app.state.container.orchestrator.client = client
    return client


@pytest.fixture
def http(app, scripted):
    with TestClient(app) as client:
        yield client


def generate(http, topic="AI in Healthcare", **params):
    response = http.post(f"{API}/articles/generate-advanced", json={"topic": topic, **params})
    assert response.status_code == 201, response.text
    return response.json()["data"]


# =============================================================================
# Система
# =============================================================================

def test_root(http):
    response = http.get("/")

    assert response.status_code == 200
    assert response.json()["health"] == "/health"


def test_health(http):
    for path in ("/health", f"{API}/health"):
        body = http.get(path).json()
        assert body["success"] is True
        assert body["data"]["status"] == "healthy"
        assert body["data"]["api_key_configured"] is True
        assert body["data"]["total_articles_generated"] == 0


def test_config(http):
    data = http.get(f"{API}/config").json()["data"]

    assert "professional" in data["valid_tones"]
    assert data["valid_lengths"] == ["short", "medium", "long"]
    assert data["limits"]["max_batch_topics"] == 5


def test_configure_rejects_short_key(http):
    response = http.post(f"{API}/configure", json={"openai_api_key": "short"})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_configure_rotates_key(app, http):
    response = http.post(f"{API}/configure", json={"openai_api_key": "sk-" + "x" * 30})

    assert response.status_code == 200
    assert response.json()["data"] == {
        "message": "API key configured successfully",
        "api_key_configured": True,
    }
    assert app.state.container.generation_config.snapshot().api_key == "sk-" + "x" * 30


# =============================================================================
# Генерация
# =============================================================================

def test_generate_advanced(http, scripted):
    data = generate(http, article_count=2, seo_keywords="ai, healthcare")

    assert data["success"] is True
    assert data["candidates_generated"] == 2
    assert data["trending_topics_analyzed"] >= 2
    assert data["article"]["optimized_article"]["title"]
    assert data["parameters_used"]["topic"] == "AI in Healthcare"
    assert data["parameters_used"]["article_count"] == 2
    assert data["seo_metadata"]["slug"] == "ai-in-healthcare"
    assert data["performance_prediction"]["confidence_level"] == "high"
    assert len(scripted.calls_for(TaskType.ARTICLE_GENERATION)) == 2


def test_generate_advanced_without_analytics(http):
    data = generate(http, include_analytics=False)

    assert "performance_prediction" not in data


def test_generate_advanced_empty_body(http):
    response = http.post(f"{API}/articles/generate-advanced", json={})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    assert body["errors"][0]["field"] == "topic"


@pytest.mark.parametrize("params", [
    {"topic": "AI"},
    {"topic": "Valid topic", "article_count": 6},
    {"topic": "Valid topic", "tone": "angry"},
    {"topic": "Valid topic", "search_depth": 4},
    {"topic": "Valid topic", "quality_threshold": 11},
])
def test_generate_advanced_invalid_params(http, scripted, params):
    response = http.post(f"{API}/articles/generate-advanced", json=params)

    assert response.status_code == 400
    assert scripted.calls == []


def test_generate_advanced_no_trends(http, scripted):
    scripted.script[TaskType.TRENDING_ANALYSIS] = [{"trending_topics": []}]

    response = http.post(f"{API}/articles/generate-advanced", json={"topic": "Nothing new"})

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "message": "No trending topics found for the specified criteria",
    }


def test_generate_advanced_upstream_unavailable(http, scripted):
    scripted.script[TaskType.TRENDING_ANALYSIS] = [GenerationUnavailable("API key not configured")]

    response = http.post(f"{API}/articles/generate-advanced", json={"topic": "Any topic"})

    assert response.status_code == 502
    assert response.json()["success"] is False


def test_generate_batch(http):
    response = http.post(f"{API}/articles/generate-batch", json={
        "topics": ["Solar power", "Wind power"],
        "article_count": 1,
    })

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["total_topics"] == 2
    assert data["successful_generations"] == 2
    assert [r["topic"] for r in data["batch_results"]] == ["Solar power", "Wind power"]


def test_generate_batch_too_many_topics(http):
    response = http.post(f"{API}/articles/generate-batch", json={
        "topics": [f"Topic number {i}" for i in range(6)],
    })

    assert response.status_code == 400


def test_generate_legacy(http):
    response = http.post(f"{API}/articles/generate", json={
        "topic": "Remote work",
        "keywords": ["remote"],
        "tone": "creative",
        "wordCount": 1800,
    })

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["tone"] == "creative"
    assert data["keywords"] == ["remote"]
    assert data["wordCount"] > 0
    assert data["status"] == "generated"


def test_generate_legacy_rejects_word_count(http):
    response = http.post(f"{API}/articles/generate", json={"topic": "Remote work", "wordCount": 50})

    assert response.status_code == 400


# =============================================================================
# Шаблоны и предпросмотр
# =============================================================================

def test_templates(http):
    data = http.get(f"{API}/articles/templates").json()["data"]

    assert len(data) == 6


def test_preview(http, scripted):
    response = http.post(f"{API}/articles/preview", json={
        "topic": "Remote work",
        "keywords": ["remote"],
        "tone": "casual",
    })

    assert response.status_code == 200
    data = response.json()["data"]
    assert "Remote work" in data["title"]
    assert data["estimatedReadTime"] == len(data["outline"]["sections"]) * 2
    assert scripted.calls == []


# =============================================================================
# Чтение и удаление
# =============================================================================

def test_get_and_delete_article(http):
    article_id = generate(http)["id"]

    response = http.get(f"{API}/articles/{article_id}")
    assert response.status_code == 200
    assert response.json()["data"]["topic"] == "AI in Healthcare"

    assert http.delete(f"{API}/articles/{article_id}").status_code == 200
    assert http.get(f"{API}/articles/{article_id}").status_code == 404


def test_get_unknown_article(http):
    response = http.get(f"{API}/articles/{uuid4()}")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Article not found"}


def test_get_article_bad_id(http):
    assert http.get(f"{API}/articles/not-a-uuid").status_code == 400


def test_list_and_search(http):
    generate(http, "AI in Healthcare")
    generate(http, "Solar energy", tone="casual")

    listing = http.get(f"{API}/articles", params={"limit": 1}).json()["data"]
    assert listing["pagination"] == {"total": 2, "limit": 1, "offset": 0, "has_more": True}

    casual = http.get(f"{API}/articles", params={"tone": "casual"}).json()["data"]
    assert [a["topic"] for a in casual["articles"]] == ["Solar energy"]

    found = http.get(f"{API}/articles/search", params={"topic": "solar"}).json()["data"]
    assert [a["topic"] for a in found] == ["Solar energy"]


def test_search_requires_topic(http):
    response = http.get(f"{API}/articles/search")

    assert response.status_code == 400
    assert response.json()["message"] == "Topic query parameter is required"


def test_stats(http):
    generate(http, tone="casual")

    data = http.get(f"{API}/articles/stats").json()["data"]

    assert data["total_articles"] == 1
    assert data["by_tone"]["casual"] == 1
    assert http.get("/health").json()["data"]["total_articles_generated"] == 1
