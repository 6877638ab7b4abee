"""
Unit tests для Article entity.
"""

import pytest

from src.domain.entities.article import Article
from src.domain.value_objects.article_status import ArticleStatus
from src.domain.value_objects.content_length import ContentLength
from src.domain.value_objects.tone import Tone
from src.shared.exceptions.domain_exceptions import DomainValidationError


def selection_result(title="Selected", content="# Selected\n\nBody"):
    return {
        "selected_article": {"article_index": 0, "title": title, "content": content, "tags": []},
        "selection_reasoning": {"quality_score": 8.0, "strengths": [], "optimization_suggestions": []},
    }


def make_article(**overrides):
    params = dict(
        topic="AI in Healthcare",
        trending_topics_analyzed=2,
        candidates_generated=2,
        result=selection_result(),
    )
    params.update(overrides)
    return Article(**params)


def test_article_creation():
    """Тест создания статьи."""
    article = make_article()

    assert article.topic == "AI in Healthcare"
    assert article.title == "Selected"
    assert article.status == ArticleStatus.GENERATED
    assert article.content_length == ContentLength.MEDIUM
    assert article.tone == Tone.PROFESSIONAL
    assert not article.is_optimized


def test_article_has_no_id_before_save():
    """Тест: ID не назначается при создании."""
    article = make_article()

    assert article.id is None
    assert article.to_dict()["id"] is None


def test_assign_id_is_stable():
    """Тест: ID назначается один раз."""
    article = make_article()

    first = article.assign_id()

    assert article.assign_id() == first
    assert make_article().assign_id() != first


def test_article_validation_empty_topic():
    """Тест валидации - пустая тема."""
    with pytest.raises(DomainValidationError):
        make_article(topic="  ")


def test_article_validation_no_candidates():
    """Тест валидации - ноль кандидатов."""
    with pytest.raises(DomainValidationError):
        make_article(candidates_generated=0)


def test_article_validation_candidates_exceed_trends():
    """Тест валидации - кандидатов больше, чем трендов."""
    with pytest.raises(DomainValidationError):
        make_article(trending_topics_analyzed=1, candidates_generated=2)


def test_article_validation_result_without_content():
    """Тест валидации - результат без текста."""
    with pytest.raises(DomainValidationError):
        make_article(result=selection_result(content=""))


def test_optimized_article_is_authoritative():
    """Тест: optimized_article важнее selected_article."""
    result = {
        "optimized_article": {"title": "Optimized", "content": "Better body"},
        "optimization_applied": [],
        "seo_improvements": [],
    }
    article = make_article(result=result)

    assert article.is_optimized
    assert article.title == "Optimized"
    assert article.content == "Better body"


def test_article_to_dict():
    """Тест сериализации для API."""
    article = make_article(tone=Tone.ENGAGING)
    article.assign_id()
    data = article.to_dict()

    assert data["id"] == str(article.id)
    assert data["tone"] == "engaging"
    assert data["content_length"] == "medium"
    assert data["status"] == "generated"
    assert data["performance_prediction"] is None
    assert data["createdAt"] == article.created_at.isoformat()


def test_article_equality_by_id():
    article = make_article()
    article.assign_id()
    assert article == article
    assert article != make_article()
    assert len({article, article}) == 1
