"""
Command Handler для статей.
"""

import logging
from typing import Any, Dict

from src.application.ai_services.batch_runner import BatchRunner
from src.application.ai_services.legacy_adapter import LegacyArticleAdapter
from src.application.ai_services.orchestrator import ArticlePipelineOrchestrator
from src.application.commands.generate_article_command import (
    GenerateArticleCommand,
    GenerateBatchCommand,
    LegacyGenerateCommand,
)
from src.domain.entities.article import Article

logger = logging.getLogger(__name__)


class ArticleCommandHandler:
    """Handler для команд генерации статей."""

    def __init__(
            self,
            orchestrator: ArticlePipelineOrchestrator,
            batch_runner: BatchRunner,
            legacy_adapter: LegacyArticleAdapter
    ):
        self.orchestrator = orchestrator
        self.batch_runner = batch_runner
        self.legacy_adapter = legacy_adapter

    async def handle_generate(self, command: GenerateArticleCommand) -> Article:
        """
        Обработка команды генерации одной статьи.

        Raises:
            PipelineError: Терминальная ошибка этапа
            GenerationUnavailable: LLM API недоступен
        """
        return await self.orchestrator.generate(command)

    async def handle_generate_batch(self, command: GenerateBatchCommand) -> Dict[str, Any]:
        """Обработка пакетной команды. Ошибки тем не пробрасываются."""
        return await self.batch_runner.run(command)

    async def handle_legacy_generate(self, command: LegacyGenerateCommand) -> Dict[str, Any]:
        """Обработка команды старого формата."""
        return await self.legacy_adapter.generate(command)
