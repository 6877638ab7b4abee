# -*- coding: utf-8 -*-
# =============================================================================
# Путь: src/application/ai_services/agents/base_agent.py
# =============================================================================
"""
Базовый класс для агентов этапов конвейера.

Агент = один тип задачи + бюджет (max_tokens, temperature) + схема ответа.
Транспорт, rate limit и синтетический fallback - в GenerationClient;
валидация ответа по Pydantic схеме - здесь.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional, Type, TypeVar
import logging
import time

from pydantic import BaseModel, ValidationError

from src.application.ai_services.prompts import build_prompt
from src.application.ai_services.schemas import TaskType

if TYPE_CHECKING:
    from src.infrastructure.ai.generation_client import GenerationClient

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=BaseModel)

__all__ = ['BaseAgent', 'TaskType', 'AgentMetrics']


@dataclass
class AgentMetrics:
    """Метрики агента."""
    total_calls: int = 0
    successful_calls: int = 0
    failed_calls: int = 0
    invalid_responses: int = 0
    synthetic_responses: int = 0
    total_latency_ms: float = 0.0

    @property
    def success_rate(self) -> float:
        return self.successful_calls / self.total_calls if self.total_calls else 0.0

    @property
    def avg_latency_ms(self) -> float:
        return self.total_latency_ms / self.successful_calls if self.successful_calls else 0.0


class BaseAgent(ABC):
    """
    Базовый агент этапа.

    Подклассы задают task_type, max_tokens, temperature, output_schema
    и реализуют process().
    """

    agent_name: str = "base"
    task_type: TaskType = TaskType.ARTICLE_GENERATION
    max_tokens: int = 2000
    temperature: float = 0.7
    output_schema: Type[BaseModel] = BaseModel

    def __init__(self, client: "GenerationClient"):
        self._client = client
        self.metrics = AgentMetrics()

    @property
    def client(self) -> "GenerationClient":
        return self._client

    async def request(self, max_tokens: int = 0, **prompt_params: Any) -> Dict[str, Any]:
        """
        Построить промпт и получить JSON-ответ модели.

        Raises:
            GenerationUnavailable: Пробрасывается из клиента
        """
        self.metrics.total_calls += 1
        start_time = time.time()

        prompt = build_prompt(self.task_type, **prompt_params)

        try:
            payload = await self._client.invoke(
                prompt,
                max_output_tokens=max_tokens or self.max_tokens,
                temperature=self.temperature,
                expect_json=True,
                task_type=self.task_type,
            )
        except Exception:
            self.metrics.failed_calls += 1
            raise

        latency = (time.time() - start_time) * 1000
        self.metrics.successful_calls += 1
        self.metrics.total_latency_ms += latency
        if payload.get("synthetic"):
            self.metrics.synthetic_responses += 1

        logger.debug(f"[{self.agent_name}] {self.task_type.value} done in {latency:.0f}ms")
        return payload

    def parse(self, payload: Dict[str, Any], schema: Optional[Type[T]] = None) -> T:
        """
        Провалидировать ответ по схеме (по умолчанию output_schema агента).

        Raises:
            ValidationError: Ответ не соответствует схеме
        """
        try:
            return (schema or self.output_schema).model_validate(payload)
        except ValidationError:
            self.metrics.invalid_responses += 1
            raise

    def get_metrics(self) -> dict:
        """Метрики агента."""
        return {
            "agent": self.agent_name,
            "task_type": self.task_type.value,
            "total_calls": self.metrics.total_calls,
            "successful_calls": self.metrics.successful_calls,
            "failed_calls": self.metrics.failed_calls,
            "invalid_responses": self.metrics.invalid_responses,
            "synthetic_responses": self.metrics.synthetic_responses,
            "success_rate": f"{self.metrics.success_rate:.2%}",
            "avg_latency_ms": f"{self.metrics.avg_latency_ms:.0f}",
        }

    @abstractmethod
    async def process(self, *args, **kwargs) -> Any:
        """Главный метод - реализуется в подклассах."""
        pass
