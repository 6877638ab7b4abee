"""
Общие фикстуры тестов.
"""

import pytest

from src.application.ai_services.orchestrator import ArticlePipelineOrchestrator
from src.infrastructure.persistence.in_memory_article_repository import InMemoryArticleRepository
from tests.fakes import ScriptedClient


@pytest.fixture
def repository():
    return InMemoryArticleRepository()


@pytest.fixture
def scripted_client():
    return ScriptedClient()


@pytest.fixture
def orchestrator(scripted_client, repository):
    return ArticlePipelineOrchestrator(scripted_client, repository)
