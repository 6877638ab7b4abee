"""
Infrastructure Exceptions

Исключения инфраструктурного слоя.
"""

from typing import Optional


class InfrastructureException(Exception):
    """Базовое исключение инфраструктуры."""
    pass


class ExternalServiceError(InfrastructureException):
    """Ошибка внешнего сервиса."""
    pass


class GenerationUnavailable(ExternalServiceError):
    """
    LLM API недоступен: нет ключа, транспортная ошибка, не-2xx статус
    или пустой ответ.
    """

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class MalformedModelOutput(InfrastructureException):
    """
    Ответ модели не удалось разобрать как JSON нужной формы.

    Наружу не выходит: клиент генерации подставляет синтетический ответ.
    """

    def __init__(self, message: str, task_type: Optional[str] = None, raw: str = ""):
        super().__init__(message)
        self.task_type = task_type
        self.raw = raw
