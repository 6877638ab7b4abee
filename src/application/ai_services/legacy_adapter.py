# -*- coding: utf-8 -*-
"""
Адаптер старого API POST /articles/generate.

Переводит плоский запрос {topic, keywords, tone, wordCount, ...}
в команду конвейера и сворачивает результат обратно в плоский ответ.
"""

import logging
from typing import Any, Dict

from src.application.ai_services.orchestrator import ArticlePipelineOrchestrator
from src.application.commands.generate_article_command import (
    GenerateArticleCommand,
    LegacyGenerateCommand,
)
from src.application.services.seo_service import count_words
from src.domain.entities.article import Article
from src.domain.value_objects.content_length import ContentLength

logger = logging.getLogger(__name__)


def to_pipeline_command(command: LegacyGenerateCommand) -> GenerateArticleCommand:
    """Legacy параметры -> параметры конвейера."""
    return GenerateArticleCommand(
        topic=command.topic,
        article_count=1,
        content_length=ContentLength.from_word_count(command.word_count),
        tone=command.tone.to_tone(),
        seo_keywords=", ".join(command.keywords),
        auto_optimize=command.seo_optimized,
        include_analytics=True,
    )


def to_legacy_response(command: LegacyGenerateCommand, article: Article) -> Dict[str, Any]:
    """Статья -> плоский legacy ответ. wordCount пересчитывается по тексту."""
    final = article.final_article() or {}
    return {
        "id": str(article.id),
        "title": final.get("title", ""),
        "subtitle": final.get("subtitle", ""),
        "content": final.get("content", ""),
        "topic": command.topic,
        "keywords": list(command.keywords),
        "tone": command.tone.value,
        "wordCount": count_words(final.get("content", "")),
        "includeImages": command.include_images,
        "seoOptimized": command.seo_optimized,
        "seoData": article.performance_prediction,
        "createdAt": article.created_at.isoformat(),
        "status": article.status.value,
    }


class LegacyArticleAdapter:
    """Legacy-фасад над оркестратором."""

    def __init__(self, orchestrator: ArticlePipelineOrchestrator):
        self.orchestrator = orchestrator

    async def generate(self, command: LegacyGenerateCommand) -> Dict[str, Any]:
        pipeline_command = to_pipeline_command(command)
        logger.info(
            f"[Legacy] '{command.topic}': wordCount={command.word_count} -> "
            f"{pipeline_command.content_length.value}"
        )
        article = await self.orchestrator.generate(pipeline_command)
        return to_legacy_response(command, article)
