# -*- coding: utf-8 -*-
# =============================================================================
# Путь: src/infrastructure/config/settings.py
# =============================================================================
"""
Application Settings - Infrastructure Layer.

Загружает настройки из переменных окружения и .env файла.
"""

from functools import lru_cache
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Настройки приложения.

    Все переменные загружаются из .env файла или переменных окружения.
    """

    # ==========================================================================
    # LLM API (OpenAI-совместимый chat/completions)
    # ==========================================================================
    openai_api_key: Optional[str] = None
    openai_api_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4o-mini"
    openai_max_tokens: int = 2500
    openai_temperature: float = 0.7
    openai_timeout_seconds: float = 180.0

    # ==========================================================================
    # Ограничение частоты запросов к LLM API
    # ==========================================================================
    rate_limit_per_minute: float = 60.0
    rate_limit_burst: int = 5
    batch_delay_seconds: float = 2.0

    # ==========================================================================
    # HTTP
    # ==========================================================================
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: List[str] = ["*"]

    # ==========================================================================
    # App Settings
    # ==========================================================================
    debug: bool = False
    log_level: str = "INFO"
    api_version: str = "1.0.0"

    # ==========================================================================
    # Pydantic Settings Config
    # ==========================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Игнорировать неизвестные переменные
        case_sensitive=False,  # Регистронезависимые имена
    )

    # ==========================================================================
    # Вспомогательные методы
    # ==========================================================================

    def get_chat_completions_url(self) -> str:
        """Полный URL эндпоинта chat/completions."""
        return self.openai_api_base_url.rstrip("/") + "/chat/completions"

    def is_api_key_configured(self) -> bool:
        """Задан ли ключ API при старте."""
        return bool(self.openai_api_key)


@lru_cache()
def get_settings() -> Settings:
    """
    Получить закэшированные настройки.

    Использует lru_cache - настройки загружаются один раз при старте.

    Возвращает:
        Экземпляр Settings
    """
    return Settings()
