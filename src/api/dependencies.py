"""
FastAPI Dependencies для DI.

Все singleton-объекты процесса собраны в Container и лежат в app.state:
хранилище статей, конфигурация генерации, rate limiter, клиент и конвейер.
"""

import time
from dataclasses import dataclass, field

from fastapi import Depends, Request

from src.application.ai_services.batch_runner import BatchRunner
from src.application.ai_services.legacy_adapter import LegacyArticleAdapter
from src.application.ai_services.orchestrator import ArticlePipelineOrchestrator
from src.application.handlers.article_command_handler import ArticleCommandHandler
from src.application.services.article_service import ArticleService
from src.application.services.preview_service import PreviewService
from src.domain.repositories.article_repository import IArticleRepository
from src.infrastructure.ai.generation_client import GenerationClient
from src.infrastructure.ai.rate_limiter import TokenBucket
from src.infrastructure.config.generation_config import GenerationConfig
from src.infrastructure.config.settings import Settings
from src.infrastructure.persistence.in_memory_article_repository import InMemoryArticleRepository


@dataclass
class Container:
    """Singleton-зависимости приложения."""

    settings: Settings
    generation_config: GenerationConfig
    rate_limiter: TokenBucket
    client: GenerationClient
    repository: IArticleRepository
    orchestrator: ArticlePipelineOrchestrator
    command_handler: ArticleCommandHandler
    article_service: ArticleService
    preview_service: PreviewService
    started_at: float = field(default_factory=time.monotonic)

    @classmethod
    def build(cls, settings: Settings) -> "Container":
        generation_config = GenerationConfig.from_settings(settings)
        rate_limiter = TokenBucket.from_settings(settings)
        client = GenerationClient(generation_config, rate_limiter=rate_limiter)
        repository = InMemoryArticleRepository()

        orchestrator = ArticlePipelineOrchestrator(client, repository)
        command_handler = ArticleCommandHandler(
            orchestrator=orchestrator,
            batch_runner=BatchRunner(
                orchestrator,
                delay_seconds=settings.batch_delay_seconds,
                rate_limiter=rate_limiter,
            ),
            legacy_adapter=LegacyArticleAdapter(orchestrator),
        )

        return cls(
            settings=settings,
            generation_config=generation_config,
            rate_limiter=rate_limiter,
            client=client,
            repository=repository,
            orchestrator=orchestrator,
            command_handler=command_handler,
            article_service=ArticleService(repository),
            preview_service=PreviewService(),
        )

    @property
    def uptime_seconds(self) -> int:
        return int(time.monotonic() - self.started_at)


def get_container(request: Request) -> Container:
    """DI для контейнера."""
    return request.app.state.container


def get_command_handler(container: Container = Depends(get_container)) -> ArticleCommandHandler:
    """DI для handler."""
    return container.command_handler


def get_article_service(container: Container = Depends(get_container)) -> ArticleService:
    """DI для service."""
    return container.article_service


def get_preview_service(container: Container = Depends(get_container)) -> PreviewService:
    return container.preview_service
