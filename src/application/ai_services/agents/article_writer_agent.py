# -*- coding: utf-8 -*-
# =============================================================================
# Путь: src/application/ai_services/agents/article_writer_agent.py
# =============================================================================
"""
Агент этапа 2: черновик статьи по одной трендовой теме.
"""

import logging
from typing import Any, Dict, Union

from src.application.ai_services.agents.base_agent import BaseAgent
from src.application.ai_services.schemas import ArticleCandidate, TaskType, TrendingTopic
from src.domain.value_objects.content_length import ContentLength

logger = logging.getLogger(__name__)


class ArticleWriterAgent(BaseAgent):
    """Пишет кандидата. Бюджет токенов зависит от длины статьи."""

    agent_name = "article_writer"
    task_type = TaskType.ARTICLE_GENERATION
    temperature = 0.7
    output_schema = ArticleCandidate

    async def process(
            self,
            trending_topic: TrendingTopic,
            content_length: Union[ContentLength, str] = ContentLength.MEDIUM,
            tone: str = "professional",
            seo_keywords: str = "",
            custom_prompt: str = ""
    ) -> Dict[str, Any]:
        """
        Сгенерировать кандидата.

        Returns:
            dict кандидата с флагом synthetic

        Raises:
            ValidationError: Ответ не соответствует схеме кандидата
            GenerationUnavailable: Ошибка LLM API
        """
        length = ContentLength(content_length)

        payload = await self.request(
            max_tokens=length.spec.max_tokens,
            headline=trending_topic.headline,
            target_keywords=trending_topic.target_keywords,
            content_length=length,
            tone=tone,
            seo_keywords=seo_keywords,
            custom_prompt=custom_prompt,
        )

        candidate = self.parse(payload)
        result = candidate.model_dump()
        result["synthetic"] = bool(payload.get("synthetic"))

        logger.info(f"[Writer] '{candidate.title[:60]}' ({candidate.word_count} words)")
        return result
