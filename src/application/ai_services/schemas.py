# -*- coding: utf-8 -*-
# =============================================================================
# Путь: src/application/ai_services/schemas.py
# =============================================================================
"""
Схемы ответов LLM для пяти задач конвейера.

Одна Pydantic модель на задачу - единственный источник правды:
- из неё строится strict JSON Schema для response_format (prompts.schema_for)
- из неё же рендерится пример формата в тексте промпта (prompts.render_contract)
- ею же валидируется ответ модели в агентах

Числовые оценки не отклоняются, а зажимаются в допустимый диапазон:
модель часто пишет 10.5 или 85 вместо 8.5.
"""

from enum import Enum
from typing import Dict, List, Type

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaskType(str, Enum):
    """
    Типы задач генерации.

    Значения совпадают с именами JSON схем и ключами синтетических ответов.
    """
    TRENDING_ANALYSIS = "trending_analysis"
    ARTICLE_GENERATION = "article_generation"
    ARTICLE_SELECTION = "article_selection"
    ARTICLE_OPTIMIZATION = "article_optimization"
    PERFORMANCE_PREDICTION = "performance_prediction"


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _unique_strings(values: List[str]) -> List[str]:
    seen = []
    for value in values:
        value = str(value).strip()
        if value and value not in seen:
            seen.append(value)
    return seen


class _LLMModel(BaseModel):
    """База: лишние ключи от модели игнорируются."""
    model_config = ConfigDict(extra="ignore")


# =============================================================================
# Этап 1: Трендовые темы
# =============================================================================

class TrendingTopic(_LLMModel):
    """Трендовая тема. Неизменяема после создания."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    headline: str = Field(description="Main trending topic/news headline", examples=["Main trending topic/news headline"])
    significance_score: float = Field(description="Newsworthiness from 0 to 10", examples=[8.5])
    trend_velocity: str = Field(description="How fast the topic is rising", examples=["rising_fast"])
    key_angles: List[str] = Field(description="Angles worth covering", examples=[["angle1", "angle2", "angle3"]])
    target_keywords: List[str] = Field(description="Search keywords", examples=[["keyword1", "keyword2"]])
    estimated_interest: str = Field(description="Expected reader interest", examples=["high"])

    @field_validator("significance_score")
    @classmethod
    def _score_range(cls, v: float) -> float:
        return _clamp(v, 0.0, 10.0)


class TrendingAnalysis(_LLMModel):
    trending_topics: List[TrendingTopic] = Field(description="Trending topics ordered by significance")


# =============================================================================
# Этап 2: Кандидат
# =============================================================================

class ArticleCandidate(_LLMModel):
    """Черновик статьи по одной трендовой теме."""

    title: str = Field(description="Click-worthy headline", examples=["Compelling article title"])
    subtitle: str = Field(description="Engaging subtitle", examples=["Engaging subtitle"])
    content: str = Field(description="Full article body in markdown", examples=["# Title\n\nFull article content in markdown..."])
    tags: List[str] = Field(description="Topic tags", examples=[["tag1", "tag2", "tag3"]])
    estimated_read_time: str = Field(description="Reading time", examples=["6 min read"])
    word_count: int = Field(description="Words in content", examples=[1200])
    seo_score: float = Field(default=0.0, description="SEO quality from 0 to 10", examples=[8.5])
    engagement_factors: List[str] = Field(default_factory=list, description="What makes it engaging", examples=[["compelling headline", "clear structure"]])

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, v: List[str]) -> List[str]:
        return _unique_strings(v)

    @field_validator("seo_score")
    @classmethod
    def _seo_range(cls, v: float) -> float:
        return _clamp(v, 0.0, 10.0)


# =============================================================================
# Этап 3: Выбор
# =============================================================================

class SelectedArticle(_LLMModel):
    article_index: int = Field(description="Index of the chosen candidate", examples=[0])
    title: str = Field(description="Optimized title", examples=["optimized title"])
    subtitle: str = Field(description="Engaging subtitle", examples=["engaging subtitle"])
    content: str = Field(description="Full article content", examples=["full article content"])
    tags: List[str] = Field(description="Topic tags", examples=[["tag1", "tag2", "tag3"]])
    estimated_read_time: str = Field(description="Reading time", examples=["5 min read"])

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, v: List[str]) -> List[str]:
        return _unique_strings(v)


class SelectionReasoning(_LLMModel):
    quality_score: float = Field(description="Overall quality from 0 to 10", examples=[8.7])
    strengths: List[str] = Field(description="Why this candidate won", examples=[["strength1", "strength2"]])
    optimization_suggestions: List[str] = Field(description="What to improve next", examples=[["suggestion1", "suggestion2"]])

    @field_validator("quality_score")
    @classmethod
    def _quality_range(cls, v: float) -> float:
        return _clamp(v, 0.0, 10.0)


class ArticleSelection(_LLMModel):
    selected_article: SelectedArticle
    selection_reasoning: SelectionReasoning


# =============================================================================
# Этап 4: Оптимизация
# =============================================================================

class OptimizedArticle(_LLMModel):
    title: str = Field(description="SEO-optimized title", examples=["SEO-optimized title"])
    subtitle: str = Field(description="Improved subtitle", examples=["improved subtitle"])
    content: str = Field(description="Proofread, optimized markdown content", examples=["full optimized content"])
    tags: List[str] = Field(description="Topic tags", examples=[["tag1", "tag2", "tag3"]])
    meta_description: str = Field(description="Meta description up to 160 characters", examples=["Meta description up to 160 characters"])
    estimated_read_time: str = Field(description="Reading time", examples=["7 min read"])

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, v: List[str]) -> List[str]:
        return _unique_strings(v)


class ArticleOptimization(_LLMModel):
    optimized_article: OptimizedArticle
    optimization_applied: List[str] = Field(description="Edits applied", examples=[["SEO title optimization", "Keyword integration"]])
    seo_improvements: List[str] = Field(description="SEO gains", examples=[["Improved keyword density", "Better structure"]])


# =============================================================================
# Этап 5: Прогноз
# =============================================================================

class PredictedMetrics(_LLMModel):
    estimated_views: str = Field(description="Expected view range", examples=["5,000-10,000"])
    estimated_read_ratio: float = Field(description="Share of readers finishing, 0 to 1", examples=[0.65])
    estimated_claps: str = Field(description="Expected claps range", examples=["150-300"])
    viral_potential: str = Field(description="low, moderate or high", examples=["moderate"])

    @field_validator("estimated_read_ratio")
    @classmethod
    def _ratio_range(cls, v: float) -> float:
        return _clamp(v, 0.0, 1.0)


class PerformancePrediction(_LLMModel):
    predicted_metrics: PredictedMetrics
    success_factors: List[str] = Field(description="Drivers of performance", examples=[["Trending topic", "Strong SEO"]])
    improvement_recommendations: List[str] = Field(description="Actionable improvements", examples=[["Add more visuals", "Include expert quotes"]])
    confidence_level: str = Field(description="low, medium or high", examples=["high"])


TASK_SCHEMAS: Dict[TaskType, Type[BaseModel]] = {
    TaskType.TRENDING_ANALYSIS: TrendingAnalysis,
    TaskType.ARTICLE_GENERATION: ArticleCandidate,
    TaskType.ARTICLE_SELECTION: ArticleSelection,
    TaskType.ARTICLE_OPTIMIZATION: ArticleOptimization,
    TaskType.PERFORMANCE_PREDICTION: PerformancePrediction,
}
