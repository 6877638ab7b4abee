# -*- coding: utf-8 -*-
"""
Пакетная генерация: одна тема за другой с паузой между ними.

Ошибка одной темы не прерывает пакет - она попадает в результаты
со статусом "error".
"""

import asyncio
import logging
import time
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from src.application.ai_services.orchestrator import ArticlePipelineOrchestrator
from src.application.commands.generate_article_command import GenerateBatchCommand

if TYPE_CHECKING:
    from src.infrastructure.ai.rate_limiter import TokenBucket

logger = logging.getLogger(__name__)


class BatchRunner:
    """
    Последовательный запуск конвейера для списка тем.

    Темп задают общий TokenBucket (тот же, что у клиента генерации)
    и минимальная пауза delay_seconds между темами.
    """

    def __init__(
            self,
            orchestrator: ArticlePipelineOrchestrator,
            delay_seconds: float = 2.0,
            rate_limiter: Optional["TokenBucket"] = None
    ):
        self.orchestrator = orchestrator
        self.delay_seconds = delay_seconds
        self.rate_limiter = rate_limiter

    async def run(self, command: GenerateBatchCommand) -> Dict[str, Any]:
        """
        Прогнать все темы.

        Returns:
            {batch_results, total_topics, successful_generations, processing_time_ms}
        """
        start_time = time.time()
        results: List[Dict[str, Any]] = []
        total = len(command.topics)

        logger.info(f"[Batch] Starting {total} topics")

        for index, topic in enumerate(command.topics):
            if self.rate_limiter is not None:
                await self.rate_limiter.acquire()

            try:
                article = await self.orchestrator.generate(replace(command.base, topic=topic))
                results.append({
                    "topic": topic,
                    "index": index,
                    "status": "success",
                    "article_id": str(article.id),
                    "processing_time_ms": article.processing_time_ms,
                })
                logger.info(f"[Batch] {index + 1}/{total} OK: '{topic}'")
            except Exception as e:
                results.append({
                    "topic": topic,
                    "index": index,
                    "status": "error",
                    "error": str(e),
                })
                logger.warning(f"[Batch] {index + 1}/{total} FAIL: '{topic}': {e}")

            if index < total - 1 and self.delay_seconds > 0:
                await asyncio.sleep(self.delay_seconds)

        successful = sum(1 for r in results if r["status"] == "success")
        logger.info(f"[Batch] Done: {successful}/{total} successful")

        return {
            "batch_results": results,
            "total_topics": total,
            "successful_generations": successful,
            "processing_time_ms": int((time.time() - start_time) * 1000),
        }
