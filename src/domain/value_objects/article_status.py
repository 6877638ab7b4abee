"""
Value Object: ArticleStatus

Статус сгенерированной статьи.
"""

from enum import Enum


class ArticleStatus(str, Enum):
    """Статусы статьи. Запись появляется только после успешного прогона конвейера."""

    GENERATED = "generated"          # Конвейер завершён, статья сохранена
