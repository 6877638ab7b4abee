# -*- coding: utf-8 -*-
"""
In-memory Repository реализация.

Хранилище живёт столько же, сколько процесс: durable-хранение
не предусмотрено. Все фильтры и статистика - линейный проход по dict.
"""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from src.domain.entities.article import Article
from src.domain.repositories.article_repository import IArticleRepository
from src.domain.value_objects.article_status import ArticleStatus
from src.domain.value_objects.content_length import ContentLength
from src.domain.value_objects.tone import Tone

logger = logging.getLogger(__name__)


class InMemoryArticleRepository(IArticleRepository):
    """
    Реализация repository на словаре.

    Адаптер в Hexagonal Architecture. Операции над одним ключом
    атомарны в рамках event loop: между await-точками никто не вклинится.
    """

    def __init__(self):
        self._articles: Dict[UUID, Article] = {}

    async def save(self, article: Article) -> Article:
        """Сохранить статью, назначив ID при первом сохранении."""
        self._articles[article.assign_id()] = article
        logger.debug(f"[Store] Saved {article.id} (total: {len(self._articles)})")
        return article

    async def find_by_id(self, article_id: UUID) -> Optional[Article]:
        """Найти статью по ID."""
        return self._articles.get(article_id)

    async def delete(self, article_id: UUID) -> bool:
        """Удалить статью."""
        return self._articles.pop(article_id, None) is not None

    async def find_all(self) -> List[Article]:
        """Все статьи в порядке сохранения."""
        return list(self._articles.values())

    async def find_by_topic(self, topic: str) -> List[Article]:
        """Поиск по подстроке темы без учёта регистра."""
        needle = topic.lower()
        return [a for a in self._articles.values() if needle in a.topic.lower()]

    async def count(self) -> int:
        return len(self._articles)

    async def compute_stats(self) -> Dict[str, Any]:
        """Статистика по всем статьям."""
        articles = list(self._articles.values())
        total = len(articles)

        average = 0
        if total:
            average = round(sum(a.processing_time_ms for a in articles) / total)

        return {
            "total_articles": total,
            "by_status": {
                "generated": sum(1 for a in articles if a.status == ArticleStatus.GENERATED),
                "optimized": sum(1 for a in articles if a.auto_optimize),
            },
            "by_tone": {
                tone.value: sum(1 for a in articles if a.tone == tone)
                for tone in Tone
            },
            "by_length": {
                length.value: sum(1 for a in articles if a.content_length == length)
                for length in ContentLength
            },
            "average_processing_time_ms": average,
        }
