"""
CQRS Commands: генерация статей.

Команды иммутабельны (frozen=True) и уже провалидированы на границе API.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from src.domain.value_objects.content_length import ContentLength
from src.domain.value_objects.tone import LegacyTone, Tone


@dataclass(frozen=True)
class GenerateArticleCommand:
    """
    Команда полного прогона конвейера для одной темы.

    Иммутабельна (frozen=True) - следует принципу CQRS.
    """

    # Required
    topic: str

    # Optional
    article_count: int = 3
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

    def __post_init__(self):
        """Приведение строковых значений к enum."""
        object.__setattr__(self, 'content_length', ContentLength(self.content_length))
        object.__setattr__(self, 'tone', Tone(self.tone))

    def parameters_used(self) -> Dict[str, Any]:
        """Параметры запроса для ответа API."""
        return {
            "article_count": self.article_count,
            "content_length": self.content_length.value,
            "tone": self.tone.value,
            "search_depth": self.search_depth,
            "recency_hours": self.recency_hours,
            "quality_threshold": self.quality_threshold,
            "auto_optimize": self.auto_optimize,
            "include_analytics": self.include_analytics,
        }


@dataclass(frozen=True)
class GenerateBatchCommand:
    """
    Команда пакетной генерации: одни параметры, несколько тем.

    topic у base игнорируется - подставляется каждая тема из topics.
    """

    topics: Tuple[str, ...]
    base: GenerateArticleCommand = field(default_factory=lambda: GenerateArticleCommand(topic="batch"))

    def __post_init__(self):
        object.__setattr__(self, 'topics', tuple(self.topics))


@dataclass(frozen=True)
class LegacyGenerateCommand:
    """Команда старого формата POST /articles/generate."""

    topic: str
    keywords: List[str] = None
    tone: LegacyTone = LegacyTone.PROFESSIONAL
    word_count: int = 1000
    include_images: bool = False
    seo_optimized: bool = True

    def __post_init__(self):
        if self.keywords is None:
            object.__setattr__(self, 'keywords', [])
        object.__setattr__(self, 'tone', LegacyTone(self.tone))
