"""
Pydantic schemas для API.
"""

from typing import Annotated, Any, List

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

from src.application.commands.generate_article_command import (
    GenerateArticleCommand,
    GenerateBatchCommand,
    LegacyGenerateCommand,
)
from src.domain.value_objects.content_length import ContentLength
from src.domain.value_objects.tone import LegacyTone, Tone

Topic = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=200)]


class GenerationOptions(BaseModel):
    """Параметры конвейера, общие для одиночной и пакетной генерации."""

    article_count: int = Field(3, ge=1, le=5, description="Число кандидатов")
    content_length: ContentLength = Field(ContentLength.MEDIUM, description="Объём статьи")
    tone: Tone = Field(Tone.PROFESSIONAL, description="Тональность")
    search_depth: int = Field(10, ge=5, le=20, description="Сколько трендов искать")
    recency_hours: int = Field(24, ge=6, le=72, description="Окно свежести трендов")
    quality_threshold: float = Field(7.0, ge=1.0, le=10.0, description="Порог качества для выбора")
    seo_keywords: str = Field("", max_length=500)
    auto_optimize: bool = True
    include_analytics: bool = True
    custom_prompt_addition: str = Field("", max_length=1000)
    exclude_sources: str = Field("", max_length=500)

    @field_validator("seo_keywords", "custom_prompt_addition", "exclude_sources")
    @classmethod
    def _strip(cls, v: str) -> str:
        return v.strip()

    def to_command(self, topic: str) -> GenerateArticleCommand:
        return GenerateArticleCommand(topic=topic, **self.model_dump(exclude={"topic", "topics"}))


class GenerateAdvancedRequest(GenerationOptions):
    """Запрос POST /articles/generate-advanced."""

    topic: Topic


class BatchGenerateRequest(GenerationOptions):
    """Запрос POST /articles/generate-batch: 1-5 тем и общие параметры."""

    topics: List[Topic] = Field(..., min_length=1, max_length=5)

    def to_batch_command(self) -> GenerateBatchCommand:
        return GenerateBatchCommand(topics=tuple(self.topics), base=self.to_command(self.topics[0]))


class LegacyGenerateRequest(BaseModel):
    """Запрос старого формата POST /articles/generate."""

    model_config = ConfigDict(populate_by_name=True)

    topic: Topic
    keywords: List[str] = Field(default_factory=list)
    tone: LegacyTone = LegacyTone.PROFESSIONAL
    word_count: int = Field(1000, ge=100, le=5000, alias="wordCount")
    include_images: bool = Field(False, alias="includeImages")
    seo_optimized: bool = Field(True, alias="seoOptimized")

    def to_command(self) -> LegacyGenerateCommand:
        return LegacyGenerateCommand(
            topic=self.topic,
            keywords=list(self.keywords),
            tone=self.tone,
            word_count=self.word_count,
            include_images=self.include_images,
            seo_optimized=self.seo_optimized,
        )


class PreviewRequest(BaseModel):
    """Запрос предпросмотра."""

    topic: Topic
    keywords: List[str] = Field(default_factory=list)
    tone: Tone = Tone.PROFESSIONAL


class ConfigureRequest(BaseModel):
    """Смена ключа API."""

    openai_api_key: str = Field(..., min_length=20, description="API key appears to be invalid (too short)")


class ApiResponse(BaseModel):
    """Конверт успешного ответа."""

    success: bool = True
    message: str
    data: Any = None
