"""
Domain Exceptions

Исключения доменного слоя.
"""

from typing import Any, Dict, List, Optional


class DomainException(Exception):
    """Базовое исключение домена."""
    pass


class DomainValidationError(DomainException):
    """Ошибка валидации доменной сущности."""
    pass


class EntityNotFoundError(DomainException):
    """Сущность не найдена."""
    pass


class RequestValidationFailed(DomainException):
    """
    Некорректный запрос.

    Хранит список ошибок по полям: [{"field", "message", "value"}].
    """

    def __init__(self, message: str = "Validation failed", errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


# =============================================================================
# Ошибки конвейера генерации
# =============================================================================

class PipelineError(DomainException):
    """Терминальная ошибка одного из обязательных этапов конвейера."""

    stage: str = "pipeline"


class NoTrendsFound(PipelineError):
    """Этап 1 не нашёл ни одной трендовой темы."""

    stage = "trend_discovery"


class AllCandidatesFailed(PipelineError):
    """Этап 2: ни один кандидат не сгенерирован."""

    stage = "candidate_generation"


class SelectionFailed(PipelineError):
    """Этап 3: ответ выбора не содержит selected_article."""

    stage = "selection"
