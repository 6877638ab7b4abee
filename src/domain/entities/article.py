# -*- coding: utf-8 -*-
"""
Доменная сущность: Статья (Article)

Запись, которую конвейер генерации сохраняет после успешного прогона:
- параметры запроса (topic, tone, content_length, ...)
- счётчики этапов (trending_topics_analyzed, candidates_generated)
- result: результат оптимизации или, если её не было, результат выбора
- performance_prediction: прогноз (может отсутствовать)
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from src.domain.value_objects.article_status import ArticleStatus
from src.domain.value_objects.content_length import ContentLength
from src.domain.value_objects.tone import Tone
from src.shared.exceptions.domain_exceptions import DomainValidationError


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Article:
    """
    Доменная сущность сгенерированной статьи.

    Инварианты:
    - ID назначается один раз, при первом сохранении (assign_id), и не меняется
    - Тема не может быть пустой
    - 1 <= candidates_generated <= trending_topics_analyzed
    - result содержит selected_article или optimized_article с title и content
    """

    # =========================================================================
    # Идентификация
    # =========================================================================
    id: Optional[UUID] = None

    # =========================================================================
    # Параметры запроса
    # =========================================================================
    topic: str = field(default="")
    content_length: ContentLength = ContentLength.MEDIUM
    tone: Tone = Tone.PROFESSIONAL
    search_depth: int = 10
    recency_hours: int = 24
    quality_threshold: float = 7.0
    seo_keywords: str = ""
    auto_optimize: bool = True
    include_analytics: bool = True
    custom_prompt_addition: str = ""
    exclude_sources: str = ""

    # =========================================================================
    # Результаты конвейера
    # =========================================================================
    trending_topics_analyzed: int = 0
    candidates_generated: int = 0
    processing_time_ms: int = 0
    result: Dict[str, Any] = field(default_factory=dict)
    performance_prediction: Optional[Dict[str, Any]] = None
    seo_metadata: Dict[str, Any] = field(default_factory=dict)

    # =========================================================================
    # Метаданные
    # =========================================================================
    created_at: datetime = field(default_factory=_utcnow)
    status: ArticleStatus = ArticleStatus.GENERATED

    def __post_init__(self):
        """Валидация инвариантов после инициализации."""
        self.validate()

    def validate(self) -> None:
        """
        Проверка инвариантов сущности.

        Исключения:
            DomainValidationError: Если инварианты нарушены
        """
        if not self.topic or len(self.topic.strip()) == 0:
            raise DomainValidationError("Article topic cannot be empty")

        if self.trending_topics_analyzed < 0 or self.processing_time_ms < 0:
            raise DomainValidationError("Counters must be non-negative")

        if self.candidates_generated < 1:
            raise DomainValidationError("Article requires at least one generated candidate")

        if self.candidates_generated > self.trending_topics_analyzed:
            raise DomainValidationError(
                f"candidates_generated ({self.candidates_generated}) exceeds "
                f"trending_topics_analyzed ({self.trending_topics_analyzed})"
            )

        final = self.final_article()
        if not final or not final.get("title") or not final.get("content"):
            raise DomainValidationError("Article result must carry a title and content")

    # =========================================================================
    # Бизнес-логика
    # =========================================================================

    def assign_id(self) -> UUID:
        """Назначить ID при первом сохранении. Повторный вызов возвращает тот же ID."""
        if self.id is None:
            self.id = uuid4()
        return self.id

    @property
    def is_optimized(self) -> bool:
        """Результат прошёл этап оптимизации."""
        return "optimized_article" in self.result

    def final_article(self) -> Optional[Dict[str, Any]]:
        """Авторитетный текст: optimized_article, иначе selected_article."""
        return self.result.get("optimized_article") or self.result.get("selected_article")

    @property
    def title(self) -> str:
        final = self.final_article() or {}
        return final.get("title", "")

    @property
    def content(self) -> str:
        final = self.final_article() or {}
        return final.get("content", "")

    def to_dict(self) -> Dict[str, Any]:
        """Представление для API (ключи как в исходном JSON-контракте)."""
        return {
            "id": str(self.id) if self.id else None,
            "topic": self.topic,
            "content_length": self.content_length.value,
            "tone": self.tone.value,
            "search_depth": self.search_depth,
            "recency_hours": self.recency_hours,
            "quality_threshold": self.quality_threshold,
            "seo_keywords": self.seo_keywords,
            "auto_optimize": self.auto_optimize,
            "include_analytics": self.include_analytics,
            "trending_topics_analyzed": self.trending_topics_analyzed,
            "candidates_generated": self.candidates_generated,
            "processing_time_ms": self.processing_time_ms,
            "result": self.result,
            "performance_prediction": self.performance_prediction,
            "seo_metadata": self.seo_metadata,
            "createdAt": self.created_at.isoformat(),
            "status": self.status.value,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Article):
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Article(id={self.id}, topic='{self.topic[:50]}', status={self.status.value})"
