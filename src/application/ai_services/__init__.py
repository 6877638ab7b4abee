# -*- coding: utf-8 -*-
"""
AI Services - конвейер генерации статей на LLM.

Компоненты:
- schemas / prompts: схемы ответов и промпты пяти задач
- agents: агенты этапов
- orchestrator: координатор конвейера
- batch_runner: пакетная генерация
- legacy_adapter: старый формат /articles/generate
"""

from src.application.ai_services.orchestrator import (
    ArticlePipelineOrchestrator,
    ProcessingStats,
    StageAttempt,
)
from src.application.ai_services.batch_runner import BatchRunner
from src.application.ai_services.legacy_adapter import LegacyArticleAdapter

__all__ = [
    'ArticlePipelineOrchestrator',
    'ProcessingStats',
    'StageAttempt',
    'BatchRunner',
    'LegacyArticleAdapter',
]
