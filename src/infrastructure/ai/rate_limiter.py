# -*- coding: utf-8 -*-
# =============================================================================
# Путь: src/infrastructure/ai/rate_limiter.py
# =============================================================================
"""
Ограничитель частоты запросов к LLM API (token bucket).

Один экземпляр на процесс: его делят клиент генерации и batch runner,
поэтому суммарная частота исходящих вызовов не превышает лимит
независимо от того, сколько HTTP-запросов обрабатывается параллельно.
"""

import asyncio
import logging
import time
from typing import Callable, Optional

from src.infrastructure.config.settings import Settings

logger = logging.getLogger(__name__)


class TokenBucket:
    """
    Асинхронный token bucket.

    rate - пополнение в токенах в секунду, capacity - размер всплеска.
    acquire() ждёт, пока не появится токен; ожидающие обслуживаются
    по очереди через asyncio.Lock.
    """

    def __init__(
            self,
            rate: float,
            capacity: int = 1,
            clock: Optional[Callable[[], float]] = None
    ):
        if rate <= 0:
            raise ValueError("rate must be positive")
        if capacity < 1:
            raise ValueError("capacity must be >= 1")

        self.rate = rate
        self.capacity = capacity
        self._clock = clock or time.monotonic
        self._tokens = float(capacity)
        self._updated = self._clock()
        self._lock = asyncio.Lock()
        self.total_wait_seconds = 0.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenBucket":
        return cls(
            rate=settings.rate_limit_per_minute / 60.0,
            capacity=settings.rate_limit_burst,
        )

    def _refill(self) -> None:
        now = self._clock()
        elapsed = now - self._updated
        if elapsed > 0:
            self._tokens = min(self.capacity, self._tokens + elapsed * self.rate)
            self._updated = now

    @property
    def available(self) -> float:
        """Текущее число токенов (без ожидания)."""
        self._refill()
        return self._tokens

    async def acquire(self) -> float:
        """
        Забрать один токен.

        Returns:
            Сколько секунд пришлось ждать
        """
        waited = 0.0
        async with self._lock:
            while True:
                self._refill()
                if self._tokens >= 1:
                    self._tokens -= 1
                    break
                delay = (1 - self._tokens) / self.rate
                logger.debug(f"[RateLimit] Waiting {delay:.2f}s for token")
                await asyncio.sleep(delay)
                waited += delay

        self.total_wait_seconds += waited
        return waited
