# -*- coding: utf-8 -*-
# =============================================================================
# Путь: src/infrastructure/config/generation_config.py
# =============================================================================
"""
Runtime-конфигурация клиента генерации.

Ключ API можно сменить без перезапуска (POST /configure).
Процесс-глобальное окружение (os.environ) не трогаем: клиент получает
объект конфигурации при создании и читает из него снимок на каждый вызов.
"""

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Optional

from src.infrastructure.config.settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationSnapshot:
    """Неизменяемый снимок параметров одного вызова."""
    api_key: Optional[str]
    api_url: str
    model: str
    timeout_seconds: float
    max_output_tokens: int = 2500
    temperature: float = 0.7
    debug: bool = False

    @property
    def supports_json_schema(self) -> bool:
        """Поддерживает ли модель response_format=json_schema."""
        return "gpt-4" in self.model or "gpt-3.5" in self.model


class GenerationConfig:
    """
    Конфигурация с единственным писателем.

    Читатели берут snapshot() без блокировки (замена ссылки атомарна),
    писатели сериализуются через asyncio.Lock.
    """

    def __init__(self, snapshot: GenerationSnapshot):
        self._snapshot = snapshot
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "GenerationConfig":
        return cls(GenerationSnapshot(
            api_key=settings.openai_api_key,
            api_url=settings.get_chat_completions_url(),
            model=settings.openai_model,
            timeout_seconds=settings.openai_timeout_seconds,
            max_output_tokens=settings.openai_max_tokens,
            temperature=settings.openai_temperature,
            debug=settings.debug,
        ))

    def snapshot(self) -> GenerationSnapshot:
        return self._snapshot

    @property
    def api_key_configured(self) -> bool:
        return bool(self._snapshot.api_key)

    async def set_api_key(self, api_key: str) -> None:
        """Заменить ключ API."""
        async with self._lock:
            self._snapshot = replace(self._snapshot, api_key=api_key)
        logger.info("[Config] API key rotated")
