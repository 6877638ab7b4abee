# -*- coding: utf-8 -*-
"""
AI Infrastructure - доступ к LLM API.

Компоненты:
- GenerationClient: асинхронный клиент chat/completions (aiohttp)
- TokenBucket: общий ограничитель частоты исходящих вызовов
"""

from src.infrastructure.ai.generation_client import (
    ClientMetrics,
    GenerationClient,
    clean_json_response,
    parse_json_payload,
)
from src.infrastructure.ai.rate_limiter import TokenBucket

__all__ = [
    'ClientMetrics',
    'GenerationClient',
    'TokenBucket',
    'clean_json_response',
    'parse_json_payload',
]
