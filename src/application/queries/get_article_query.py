"""
CQRS Queries: чтение сохранённых статей.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from src.domain.value_objects.content_length import ContentLength
from src.domain.value_objects.tone import Tone


@dataclass(frozen=True)
class GetArticleQuery:
    """Запрос статьи по ID."""

    article_id: UUID


@dataclass(frozen=True)
class SearchArticlesQuery:
    """Поиск по подстроке темы."""

    topic: str


@dataclass(frozen=True)
class ListArticlesQuery:
    """Запрос списка статей с фильтрами и пагинацией."""

    topic: Optional[str] = None
    tone: Optional[Tone] = None
    length: Optional[ContentLength] = None
    limit: int = 10
    offset: int = 0
