"""
Application Service для чтения и удаления статей.
"""

import logging
from typing import Any, Dict, List

from src.application.queries.get_article_query import (
    GetArticleQuery,
    ListArticlesQuery,
    SearchArticlesQuery,
)
from src.domain.entities.article import Article
from src.domain.repositories.article_repository import IArticleRepository
from src.shared.exceptions.domain_exceptions import EntityNotFoundError, RequestValidationFailed

logger = logging.getLogger(__name__)


class ArticleService:
    """
    Application Service для статей.

    Фильтрация и пагинация поверх IArticleRepository.
    """

    def __init__(self, repository: IArticleRepository):
        self.repository = repository

    async def get_article(self, query: GetArticleQuery) -> Article:
        """
        Получить статью по ID.

        Raises:
            EntityNotFoundError: Статьи нет
        """
        article = await self.repository.find_by_id(query.article_id)
        if article is None:
            raise EntityNotFoundError("Article not found")
        return article

    async def delete_article(self, query: GetArticleQuery) -> None:
        """
        Удалить статью.

        Raises:
            EntityNotFoundError: Статьи нет
        """
        if not await self.repository.delete(query.article_id):
            raise EntityNotFoundError("Article not found")
        logger.info(f"[Articles] Deleted {query.article_id}")

    async def list_articles(self, query: ListArticlesQuery) -> Dict[str, Any]:
        """
        Список с фильтрами topic/tone/length и пагинацией.

        Returns:
            {articles, pagination: {total, limit, offset, has_more}}
        """
        articles = await self.repository.find_all()

        if query.topic:
            needle = query.topic.lower()
            articles = [a for a in articles if needle in a.topic.lower()]
        if query.tone is not None:
            articles = [a for a in articles if a.tone == query.tone]
        if query.length is not None:
            articles = [a for a in articles if a.content_length == query.length]

        total = len(articles)
        page = articles[query.offset:query.offset + query.limit]

        return {
            "articles": [a.to_dict() for a in page],
            "pagination": {
                "total": total,
                "limit": query.limit,
                "offset": query.offset,
                "has_more": query.offset + query.limit < total,
            },
        }

    async def search_articles(self, query: SearchArticlesQuery) -> List[Article]:
        """
        Поиск по подстроке темы.

        Raises:
            RequestValidationFailed: Пустая строка поиска
        """
        if not query.topic or not query.topic.strip():
            raise RequestValidationFailed(
                "Topic query parameter is required",
                errors=[{"field": "topic", "message": "Topic query parameter is required", "value": query.topic}],
            )
        return await self.repository.find_by_topic(query.topic.strip())

    async def get_stats(self) -> Dict[str, Any]:
        """Агрегированная статистика."""
        return await self.repository.compute_stats()
