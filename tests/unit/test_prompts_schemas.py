"""
Unit tests для библиотеки промптов и схем.
"""

import json

import pytest

from src.application.ai_services.mock_responses import get_mock_response
from src.application.ai_services.prompts import build_prompt, render_contract, schema_for
from src.application.ai_services.schemas import (
    TASK_SCHEMAS,
    ArticleCandidate,
    TaskType,
    TrendingTopic,
)
from src.domain.value_objects.content_length import ContentLength


def _walk_objects(node):
    if isinstance(node, dict):
        if node.get("type") == "object":
            yield node
        for value in node.values():
            yield from _walk_objects(value)
    elif isinstance(node, list):
        for item in node:
            yield from _walk_objects(item)


@pytest.mark.parametrize("task", list(TaskType))
def test_schema_is_strict(task):
    """Тест: каждая схема strict, без $ref, все поля обязательны."""
    descriptor = schema_for(task)

    assert descriptor["name"] == task.value
    assert descriptor["strict"] is True
    assert "$ref" not in json.dumps(descriptor["schema"])

    for obj in _walk_objects(descriptor["schema"]):
        assert obj["additionalProperties"] is False
        assert set(obj["required"]) == set(obj["properties"])


def test_schema_for_unknown_task():
    assert schema_for("unknown_task") is None


@pytest.mark.parametrize("task", list(TaskType))
def test_contract_matches_schema(task):
    """Тест: формат в промпте содержит те же поля, что и схема."""
    contract = json.loads(render_contract(task))
    schema = schema_for(task)["schema"]

    assert set(contract) == set(schema["properties"])


@pytest.mark.parametrize("task", list(TaskType))
def test_mock_response_validates(task):
    """Тест: синтетические ответы проходят валидацию своих схем."""
    TASK_SCHEMAS[task].model_validate(get_mock_response(task, "article about: Test"))


def test_trending_prompt():
    prompt = build_prompt(
        TaskType.TRENDING_ANALYSIS,
        topic="Green energy", search_depth=15, recency_hours=48, exclude_sources="example.com",
    )
    assert "related to: Green energy" in prompt
    assert "last 48 hours" in prompt
    assert "top 15" in prompt
    assert "Exclude sources from: example.com" in prompt
    assert '"trending_topics"' in prompt


def test_candidate_prompt_without_optional_parts():
    prompt = build_prompt(
        TaskType.ARTICLE_GENERATION,
        headline="Solar", target_keywords=["pv"], content_length=ContentLength.SHORT, tone="casual",
    )
    assert "800-1200 words" in prompt
    assert "4 main sections" in prompt
    assert "Tone: casual" in prompt
    assert "ADDITIONAL INSTRUCTIONS" not in prompt
    assert "Additional SEO keywords" not in prompt


def test_selection_prompt_lists_candidates():
    prompt = build_prompt(
        TaskType.ARTICLE_SELECTION,
        candidates=[{"title": "Candidate A"}], topic="Solar", quality_threshold=8.0,
    )
    assert "Candidate A" in prompt
    assert "QUALITY THRESHOLD: 8.0/10" in prompt
    assert "(weight: 30%)" in prompt


def test_build_prompt_unknown_task():
    with pytest.raises(ValueError):
        build_prompt("unknown_task", topic="x")


def test_scores_are_clamped():
    """Тест: оценки вне диапазона зажимаются, а не отклоняются."""
    topic = TrendingTopic(
        headline="h", significance_score=42, trend_velocity="v",
        key_angles=[], target_keywords=[], estimated_interest="high",
    )
    assert topic.significance_score == 10.0


def test_candidate_tags_deduplicated():
    candidate = ArticleCandidate(
        title="t", subtitle="s", content="c", tags=["ai", "ai", " ml ", ""],
        estimated_read_time="1 min read", word_count=10,
    )
    assert candidate.tags == ["ai", "ml"]
    assert candidate.seo_score == 0.0
    assert candidate.engagement_factors == []
