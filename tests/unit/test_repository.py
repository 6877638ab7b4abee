"""
Unit tests для InMemoryArticleRepository и ArticleService.
"""

from uuid import uuid4

import pytest

from src.application.queries.get_article_query import (
    GetArticleQuery,
    ListArticlesQuery,
    SearchArticlesQuery,
)
from src.application.services.article_service import ArticleService
from src.domain.entities.article import Article
from src.domain.value_objects.content_length import ContentLength
from src.domain.value_objects.tone import Tone
from src.shared.exceptions.domain_exceptions import EntityNotFoundError, RequestValidationFailed


def make_article(topic="AI in Healthcare", **overrides):
    params = dict(
        topic=topic,
        trending_topics_analyzed=2,
        candidates_generated=1,
        processing_time_ms=100,
        result={"selected_article": {"title": f"About {topic}", "content": "Body text"}},
    )
    params.update(overrides)
    return Article(**params)


@pytest.mark.asyncio
async def test_save_and_find(repository):
    article = make_article()
    await repository.save(article)

    assert await repository.find_by_id(article.id) is article
    assert await repository.find_by_id(uuid4()) is None
    assert await repository.count() == 1


@pytest.mark.asyncio
async def test_save_assigns_id_once(repository):
    """Тест: ID назначается при сохранении и не меняется при повторном."""
    article = make_article()
    assert article.id is None

    await repository.save(article)
    article_id = article.id
    await repository.save(article)

    assert article_id is not None
    assert article.id == article_id
    assert await repository.count() == 1


@pytest.mark.asyncio
async def test_find_by_topic_case_insensitive(repository):
    await repository.save(make_article("AI in Healthcare"))
    await repository.save(make_article("Healthcare costs"))
    await repository.save(make_article("Solar energy"))

    found = await repository.find_by_topic("HEALTHCARE")

    assert [a.topic for a in found] == ["AI in Healthcare", "Healthcare costs"]


@pytest.mark.asyncio
async def test_delete(repository):
    article = make_article()
    await repository.save(article)

    assert await repository.delete(article.id) is True
    assert await repository.delete(article.id) is False
    assert await repository.find_by_id(article.id) is None


@pytest.mark.asyncio
async def test_stats(repository):
    """Тест статистики: разбивки и среднее время."""
    await repository.save(make_article(tone=Tone.CASUAL, processing_time_ms=100))
    await repository.save(make_article(content_length=ContentLength.LONG, processing_time_ms=201,
                                       auto_optimize=False))

    stats = await repository.compute_stats()

    assert stats["total_articles"] == 2
    assert stats["by_status"] == {"generated": 2, "optimized": 1}
    assert stats["by_tone"]["casual"] == 1
    assert stats["by_tone"]["professional"] == 1
    assert stats["by_length"] == {"short": 0, "medium": 1, "long": 1}
    assert stats["average_processing_time_ms"] == 150
    # Подсчёт не меняет хранилище
    assert await repository.compute_stats() == stats


@pytest.mark.asyncio
async def test_stats_empty(repository):
    stats = await repository.compute_stats()

    assert stats["total_articles"] == 0
    assert stats["average_processing_time_ms"] == 0


# =============================================================================
# ArticleService
# =============================================================================

@pytest.mark.asyncio
async def test_service_get_missing_raises(repository):
    service = ArticleService(repository)

    with pytest.raises(EntityNotFoundError, match="Article not found"):
        await service.get_article(GetArticleQuery(article_id=uuid4()))

    with pytest.raises(EntityNotFoundError):
        await service.delete_article(GetArticleQuery(article_id=uuid4()))


@pytest.mark.asyncio
async def test_service_list_filters_and_pagination(repository):
    service = ArticleService(repository)
    for i in range(5):
        await repository.save(make_article(f"AI topic {i}"))
    await repository.save(make_article("Gardening", tone=Tone.CASUAL))

    page = await service.list_articles(ListArticlesQuery(topic="ai", limit=2, offset=1))

    assert [a["topic"] for a in page["articles"]] == ["AI topic 1", "AI topic 2"]
    assert page["pagination"] == {"total": 5, "limit": 2, "offset": 1, "has_more": True}

    casual = await service.list_articles(ListArticlesQuery(tone=Tone.CASUAL))
    assert [a["topic"] for a in casual["articles"]] == ["Gardening"]
    assert casual["pagination"]["has_more"] is False


@pytest.mark.asyncio
async def test_service_search_requires_topic(repository):
    service = ArticleService(repository)

    with pytest.raises(RequestValidationFailed):
        await service.search_articles(SearchArticlesQuery(topic="  "))


@pytest.mark.asyncio
async def test_service_search(repository):
    service = ArticleService(repository)
    await repository.save(make_article("Quantum computing"))

    found = await service.search_articles(SearchArticlesQuery(topic=" quantum "))

    assert len(found) == 1
