# -*- coding: utf-8 -*-
# =============================================================================
# Путь: src/application/ai_services/agents/performance_predictor_agent.py
# =============================================================================
"""
Агент этапа 5: прогноз эффективности статьи.
"""

import logging
from typing import Any, Dict

from src.application.ai_services.agents.base_agent import BaseAgent
from src.application.ai_services.schemas import PerformancePrediction, TaskType

logger = logging.getLogger(__name__)


class PerformancePredictorAgent(BaseAgent):

    agent_name = "performance_predictor"
    task_type = TaskType.PERFORMANCE_PREDICTION
    max_tokens = 1000
    temperature = 0.4
    output_schema = PerformancePrediction

    async def process(self, article: Dict[str, Any], topic: str) -> Dict[str, Any]:
        """
        Спрогнозировать метрики для финальной статьи.

        Args:
            article: optimized_article или selected_article
            topic: Тема запроса
        """
        payload = await self.request(
            title=article.get("title", ""),
            topic=topic,
            content=article.get("content", ""),
            tags=article.get("tags") or [],
        )

        prediction = self.parse(payload)
        result = prediction.model_dump()
        result["synthetic"] = bool(payload.get("synthetic"))

        logger.info(
            f"[Predictor] views={prediction.predicted_metrics.estimated_views}, "
            f"confidence={prediction.confidence_level}"
        )
        return result
