# -*- coding: utf-8 -*-
# =============================================================================
# Путь: src/application/ai_services/agents/trend_analyst_agent.py
# =============================================================================
"""
Агент этапа 1: поиск трендовых тем.
"""

import logging
from typing import List

from pydantic import ValidationError

from src.application.ai_services.agents.base_agent import BaseAgent
from src.application.ai_services.schemas import TaskType, TrendingAnalysis, TrendingTopic

logger = logging.getLogger(__name__)


class TrendAnalystAgent(BaseAgent):
    """
    Находит трендовые темы по запросу.

    Некорректные элементы списка отбрасываются по одному,
    остальные идут дальше.
    """

    agent_name = "trend_analyst"
    task_type = TaskType.TRENDING_ANALYSIS
    max_tokens = 1500
    temperature = 0.3
    output_schema = TrendingAnalysis

    async def process(
            self,
            topic: str,
            search_depth: int = 10,
            recency_hours: int = 24,
            exclude_sources: str = ""
    ) -> List[TrendingTopic]:
        """Главный метод -> список TrendingTopic (может быть пустым)."""
        payload = await self.request(
            topic=topic,
            search_depth=search_depth,
            recency_hours=recency_hours,
            exclude_sources=exclude_sources,
        )

        raw_topics = payload.get("trending_topics") or []
        if not isinstance(raw_topics, list):
            logger.warning(f"[Trends] trending_topics is {type(raw_topics).__name__}, not a list")
            return []

        topics: List[TrendingTopic] = []
        for i, item in enumerate(raw_topics):
            try:
                topics.append(TrendingTopic.model_validate(item))
            except ValidationError as e:
                self.metrics.invalid_responses += 1
                logger.warning(f"[Trends] Dropping malformed topic #{i}: {e.error_count()} errors")

        logger.info(
            f"[Trends] '{topic}': {len(topics)} topics"
            f"{' (synthetic)' if payload.get('synthetic') else ''}"
        )
        return topics
