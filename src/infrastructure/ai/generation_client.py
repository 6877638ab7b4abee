# -*- coding: utf-8 -*-
# =============================================================================
# Путь: src/infrastructure/ai/generation_client.py
# =============================================================================
"""
Клиент генерации: один вызов chat/completions.

Что делает:
- system persona + user prompt (+ инструкция "только JSON")
- response_format=json_schema для моделей gpt-4* / gpt-3.5*
- чистка ответа от markdown-обёрток и прозы вокруг JSON
- при неразборчивом JSON - синтетический ответ (synthetic=True) и warning в лог

Чего не делает:
- не валидирует JSON по схеме задачи (это работа агентов этапов)
- не повторяет запросы: ошибки транспорта и не-2xx статусы сразу
  превращаются в GenerationUnavailable
"""

import asyncio
import json
import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

import aiohttp

from src.application.ai_services.mock_responses import get_mock_response
from src.application.ai_services.prompts import JSON_INSTRUCTION, SYSTEM_PERSONA, schema_for
from src.application.ai_services.schemas import TaskType
from src.infrastructure.ai.rate_limiter import TokenBucket
from src.infrastructure.config.generation_config import GenerationConfig
from src.shared.exceptions.infrastructure_exceptions import (
    GenerationUnavailable,
    MalformedModelOutput,
)

logger = logging.getLogger(__name__)

_FENCE_JSON = re.compile(r"```json\s*", re.IGNORECASE)
_FENCE = re.compile(r"```\s*")
_DECODER = json.JSONDecoder()


@dataclass
class ClientMetrics:
    """Метрики клиента."""
    total_calls: int = 0
    successful_calls: int = 0
    failed_calls: int = 0
    synthetic_responses: int = 0
    total_latency_ms: float = 0.0

    @property
    def success_rate(self) -> float:
        return self.successful_calls / self.total_calls if self.total_calls else 0.0

    @property
    def avg_latency_ms(self) -> float:
        return self.total_latency_ms / self.successful_calls if self.successful_calls else 0.0


def clean_json_response(content: str) -> str:
    """
    Убрать ```json / ``` обёртки, текст до первой { или [ и всё после
    парной ей закрывающей скобки.
    """
    content = _FENCE_JSON.sub("", content)
    content = _FENCE.sub("", content)

    starts = [i for i in (content.find("{"), content.find("[")) if i != -1]
    if not starts:
        return content.strip()

    start = min(starts)
    try:
        _, end = _DECODER.raw_decode(content, start)
    except json.JSONDecodeError:
        # Битый JSON: обрезаем по последней скобке, json.loads выдаст точную ошибку
        end = max(content.rfind("}"), content.rfind("]")) + 1
        if end <= start:
            end = len(content)

    return content[start:end].strip()


def parse_json_payload(content: str, task_type: Union[TaskType, str, None] = None) -> Dict[str, Any]:
    """
    Разобрать ответ модели в dict.

    Raises:
        MalformedModelOutput: Не JSON или JSON не объект
    """
    task_value = task_type.value if isinstance(task_type, TaskType) else task_type
    cleaned = clean_json_response(content)

    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise MalformedModelOutput(f"Invalid JSON: {e}", task_type=task_value, raw=content)

    # Модель иногда возвращает голый список тем вместо объекта
    if isinstance(payload, list) and task_value == TaskType.TRENDING_ANALYSIS.value:
        payload = {"trending_topics": payload}

    if not isinstance(payload, dict):
        raise MalformedModelOutput(
            f"Expected JSON object, got {type(payload).__name__}",
            task_type=task_value,
            raw=content,
        )

    return payload


def _message_text(content: Any) -> Optional[str]:
    """
    Текст сообщения: строка или список частей [{"type": "text", "text": ...}].

    Прочие формы (картинки, tool calls, числа) - None.
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = [
            part["text"] for part in content
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        ]
        return "".join(parts) or None
    return None


class GenerationClient:
    """
    Асинхронный клиент LLM API.

    Конфигурация (ключ, модель, URL) читается снимком на каждый вызов,
    поэтому смена ключа через GenerationConfig видна сразу.
    """

    def __init__(
            self,
            config: GenerationConfig,
            rate_limiter: Optional[TokenBucket] = None,
            session: Optional[aiohttp.ClientSession] = None
    ):
        self.config = config
        self.rate_limiter = rate_limiter
        self._session = session
        self._owns_session = session is None
        self.metrics = ClientMetrics()

    async def __aenter__(self) -> "GenerationClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        """Закрыть собственную HTTP-сессию."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        if self._owns_session:
            self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    # =========================================================================
    # Транспорт
    # =========================================================================

    async def _post(
            self,
            url: str,
            headers: Dict[str, str],
            body: Dict[str, Any],
            timeout_seconds: float
    ) -> Tuple[int, Any]:
        """
        POST запрос. Возвращает (status, разобранное тело или текст).
        """
        session = self._get_session()
        timeout = aiohttp.ClientTimeout(total=timeout_seconds)

        async with session.post(url, headers=headers, json=body, timeout=timeout) as response:
            text = await response.text()
            try:
                data = json.loads(text) if text else {}
            except json.JSONDecodeError:
                data = text
            return response.status, data

    @staticmethod
    def _upstream_error(status: int, data: Any) -> str:
        if isinstance(data, dict):
            error = data.get("error")
            if isinstance(error, dict) and error.get("message"):
                return error["message"]
            if isinstance(error, str):
                return error
        return f"HTTP {status}"

    def build_body(
            self,
            prompt: str,
            max_output_tokens: int,
            temperature: float,
            expect_json: bool,
            task_type: Union[TaskType, str, None],
            model: str,
            supports_json_schema: bool
    ) -> Dict[str, Any]:
        """Тело запроса chat/completions."""
        user_prompt = prompt + JSON_INSTRUCTION if expect_json else prompt

        body: Dict[str, Any] = {
            "model": model,
            "messages": [
                {"role": "system", "content": SYSTEM_PERSONA},
                {"role": "user", "content": user_prompt},
            ],
            "max_tokens": max_output_tokens,
            "temperature": temperature,
        }

        if expect_json and supports_json_schema and task_type is not None:
            schema = schema_for(task_type)
            if schema is not None:
                body["response_format"] = {"type": "json_schema", "json_schema": schema}

        return body

    # =========================================================================
    # Публичный API
    # =========================================================================

    async def invoke(
            self,
            prompt: str,
            max_output_tokens: Optional[int] = None,
            temperature: Optional[float] = None,
            expect_json: bool = False,
            task_type: Union[TaskType, str, None] = None
    ) -> Union[str, Dict[str, Any]]:
        """
        Один вызов модели.

        Args:
            prompt: Текст промпта
            max_output_tokens: Лимит токенов ответа (по умолчанию из конфигурации)
            temperature: Температура 0..2 (по умолчанию из конфигурации)
            expect_json: Ожидать JSON (вернётся dict)
            task_type: Тип задачи для схемы и синтетического ответа

        Returns:
            str (expect_json=False) или dict с флагом synthetic

        Raises:
            GenerationUnavailable: Нет ключа, транспорт, не-2xx, пустой ответ
        """
        snapshot = self.config.snapshot()
        if max_output_tokens is None:
            max_output_tokens = snapshot.max_output_tokens
        if temperature is None:
            temperature = snapshot.temperature
        if not 0 <= temperature <= 2:
            raise ValueError(f"temperature must be in [0, 2], got {temperature}")

        if not snapshot.api_key:
            raise GenerationUnavailable("API key not configured")

        task_value = task_type.value if isinstance(task_type, TaskType) else task_type
        body = self.build_body(
            prompt=prompt,
            max_output_tokens=max_output_tokens,
            temperature=temperature,
            expect_json=expect_json,
            task_type=task_type,
            model=snapshot.model,
            supports_json_schema=snapshot.supports_json_schema,
        )
        headers = {
            "Authorization": f"Bearer {snapshot.api_key}",
            "Content-Type": "application/json",
        }

        if self.rate_limiter is not None:
            await self.rate_limiter.acquire()

        self.metrics.total_calls += 1
        start_time = time.time()

        try:
            status, data = await self._post(snapshot.api_url, headers, body, snapshot.timeout_seconds)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.metrics.failed_calls += 1
            logger.error(f"[Generation] {task_value}: transport error: {e}")
            raise GenerationUnavailable(f"Generation API request failed: {e}") from e

        if not 200 <= status < 300:
            self.metrics.failed_calls += 1
            message = self._upstream_error(status, data)
            logger.error(f"[Generation] {task_value}: upstream {status}: {message}")
            raise GenerationUnavailable(f"Generation API error: {message}", status=status)

        try:
            content = _message_text(data["choices"][0]["message"]["content"])
        except (KeyError, IndexError, TypeError):
            content = None

        if not content:
            self.metrics.failed_calls += 1
            raise GenerationUnavailable("No content received from generation API", status=status)

        latency = (time.time() - start_time) * 1000
        self.metrics.successful_calls += 1
        self.metrics.total_latency_ms += latency

        if snapshot.debug:
            logger.debug(f"[Generation] {task_value}: {latency:.0f}ms, {len(content)} chars")

        if not expect_json:
            return content

        try:
            payload = parse_json_payload(content, task_type)
        except MalformedModelOutput as e:
            self.metrics.synthetic_responses += 1
            logger.warning(f"[Generation] {task_value}: {e}. Returning synthetic response")
            payload = get_mock_response(task_type, prompt) if task_type else {}
            payload["synthetic"] = True
            return payload

        payload["synthetic"] = False
        return payload

    def get_metrics(self) -> Dict[str, Any]:
        """Метрики клиента."""
        snapshot = self.config.snapshot()
        return {
            "model": snapshot.model,
            "total_calls": self.metrics.total_calls,
            "successful_calls": self.metrics.successful_calls,
            "failed_calls": self.metrics.failed_calls,
            "synthetic_responses": self.metrics.synthetic_responses,
            "success_rate": f"{self.metrics.success_rate:.2%}",
            "avg_latency_ms": f"{self.metrics.avg_latency_ms:.0f}",
        }
