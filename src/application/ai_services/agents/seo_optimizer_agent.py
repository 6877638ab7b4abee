# -*- coding: utf-8 -*-
# =============================================================================
# Путь: src/application/ai_services/agents/seo_optimizer_agent.py
# =============================================================================
"""
Агент этапа 4: SEO-оптимизация и вычитка выбранной статьи.
"""

import logging
from typing import Any, Dict

from src.application.ai_services.agents.base_agent import BaseAgent
from src.application.ai_services.schemas import ArticleOptimization, TaskType

logger = logging.getLogger(__name__)


class SEOOptimizerAgent(BaseAgent):
    """Оптимизирует результат выбора с учётом его рекомендаций."""

    agent_name = "seo_optimizer"
    task_type = TaskType.ARTICLE_OPTIMIZATION
    max_tokens = 2500
    temperature = 0.3
    output_schema = ArticleOptimization

    async def process(
            self,
            selection: Dict[str, Any],
            topic: str,
            seo_keywords: str = ""
    ) -> Dict[str, Any]:
        """
        Оптимизировать статью.

        Raises:
            ValidationError: Ответ без корректного optimized_article
            GenerationUnavailable: Ошибка LLM API
        """
        selected = selection["selected_article"]
        suggestions = (selection.get("selection_reasoning") or {}).get("optimization_suggestions", [])

        payload = await self.request(
            title=selected["title"],
            content=selected["content"],
            topic=topic,
            seo_keywords=seo_keywords,
            suggestions=suggestions,
        )

        optimization = self.parse(payload)
        result = optimization.model_dump()
        result["synthetic"] = bool(payload.get("synthetic"))

        logger.info(f"[SEO] Applied: {', '.join(optimization.optimization_applied[:3])}")
        return result
