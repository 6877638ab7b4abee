# -*- coding: utf-8 -*-
# =============================================================================
# Путь: src/application/ai_services/agents/article_selector_agent.py
# =============================================================================
"""
Агент этапа 3: выбор лучшего кандидата.
"""

import logging
from typing import Any, Dict, List

from pydantic import ValidationError

from src.application.ai_services.agents.base_agent import BaseAgent
from src.application.ai_services.schemas import ArticleSelection, TaskType
from src.shared.exceptions.domain_exceptions import SelectionFailed

logger = logging.getLogger(__name__)


class ArticleSelectorAgent(BaseAgent):
    """
    Выбирает статью из кандидатов.

    Ответ без пригодного selected_article - терминальная ошибка
    (SelectionFailed): без выбранной статьи сохранять нечего.
    """

    agent_name = "article_selector"
    task_type = TaskType.ARTICLE_SELECTION
    max_tokens = 2000
    temperature = 0.2
    output_schema = ArticleSelection

    async def process(
            self,
            candidates: List[Dict[str, Any]],
            topic: str,
            quality_threshold: float = 7.0
    ) -> Dict[str, Any]:
        """
        Выбрать статью.

        Raises:
            SelectionFailed: Нет selected_article или он некорректен
            GenerationUnavailable: Ошибка LLM API
        """
        payload = await self.request(
            candidates=[
                {k: v for k, v in candidate.items() if k != "synthetic"}
                for candidate in candidates
            ],
            topic=topic,
            quality_threshold=quality_threshold,
        )

        if not payload.get("selected_article"):
            raise SelectionFailed("Failed to select best article")

        try:
            selection = self.parse(payload)
        except ValidationError as e:
            raise SelectionFailed(f"Failed to select best article: {e.error_count()} schema errors") from e

        selected = selection.selected_article
        if not selected.title.strip() or not selected.content.strip():
            raise SelectionFailed("Selected article has no title or content")

        result = selection.model_dump()
        result["synthetic"] = bool(payload.get("synthetic"))

        logger.info(
            f"[Selector] Picked #{selected.article_index} of {len(candidates)}: "
            f"'{selected.title[:60]}' (quality {selection.selection_reasoning.quality_score})"
        )
        return result
