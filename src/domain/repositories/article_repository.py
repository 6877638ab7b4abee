"""
Repository Interface: IArticleRepository

Порт (интерфейс) для работы с хранилищем статей.
Реализации (адаптеры) находятся в infrastructure layer.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from uuid import UUID

from src.domain.entities.article import Article


class IArticleRepository(ABC):
    """
    Интерфейс репозитория статей.

    Следует Repository Pattern и является портом в Hexagonal Architecture.
    Конвейер знает только этот интерфейс, поэтому volatile-хранилище
    можно заменить на durable без изменений в оркестраторе.
    """

    @abstractmethod
    async def save(self, article: Article) -> Article:
        """
        Сохранить статью.

        Реализация назначает ID (article.assign_id()) при первом сохранении;
        повторное сохранение той же статьи ID не меняет.

        Args:
            article: Статья для сохранения

        Returns:
            Сохранённая статья с ID
        """
        pass

    @abstractmethod
    async def find_by_id(self, article_id: UUID) -> Optional[Article]:
        """
        Найти статью по ID.

        Args:
            article_id: UUID статьи

        Returns:
            Статья или None
        """
        pass

    @abstractmethod
    async def delete(self, article_id: UUID) -> bool:
        """
        Удалить статью.

        Args:
            article_id: UUID статьи

        Returns:
            True если удалена
        """
        pass

    @abstractmethod
    async def find_all(self) -> List[Article]:
        """
        Все статьи в порядке сохранения.

        Returns:
            Список статей
        """
        pass

    @abstractmethod
    async def find_by_topic(self, topic: str) -> List[Article]:
        """
        Статьи, тема которых содержит подстроку (без учёта регистра).

        Args:
            topic: Подстрока темы

        Returns:
            Список статей
        """
        pass

    @abstractmethod
    async def compute_stats(self) -> Dict[str, Any]:
        """
        Агрегированная статистика.

        Returns:
            {total_articles, by_status, by_tone, by_length,
             average_processing_time_ms}
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Количество статей."""
        pass
