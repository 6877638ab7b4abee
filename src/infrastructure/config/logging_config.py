# -*- coding: utf-8 -*-
"""
Настройка логирования.

Путь: src/infrastructure/config/logging_config.py
"""

import logging

from src.infrastructure.config.settings import Settings, get_settings

LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(settings: Settings = None) -> None:
    """Настроить корневой логгер по log_level/debug из настроек."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
    )

    # aiohttp слишком шумный на DEBUG
    logging.getLogger("aiohttp").setLevel(max(level, logging.INFO))
