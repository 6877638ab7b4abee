"""
Обработчики исключений: доменные и инфраструктурные ошибки -> JSON конверт.

{success: false, message, errors?}
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.shared.exceptions.domain_exceptions import (
    DomainValidationError,
    EntityNotFoundError,
    PipelineError,
    RequestValidationFailed,
)
from src.shared.exceptions.infrastructure_exceptions import GenerationUnavailable

logger = logging.getLogger(__name__)


def error_response(
        status_code: int,
        message: str,
        errors: Optional[List[Dict[str, Any]]] = None
) -> JSONResponse:
    body: Dict[str, Any] = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def _field_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append({
            "field": ".".join(location) or "body",
            "message": error.get("msg", "Invalid value"),
            "value": error.get("input"),
        })
    return errors


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(400, "Validation failed", _field_errors(exc))


async def validation_failed_handler(request: Request, exc: RequestValidationFailed) -> JSONResponse:
    return error_response(400, str(exc), exc.errors)


async def not_found_handler(request: Request, exc: EntityNotFoundError) -> JSONResponse:
    return error_response(404, str(exc))


async def pipeline_error_handler(request: Request, exc: PipelineError) -> JSONResponse:
    logger.error(f"[API] Pipeline failed at {exc.stage}: {exc}")
    return error_response(500, str(exc))


async def domain_validation_handler(request: Request, exc: DomainValidationError) -> JSONResponse:
    logger.error(f"[API] Domain validation: {exc}")
    return error_response(500, str(exc))


async def generation_unavailable_handler(request: Request, exc: GenerationUnavailable) -> JSONResponse:
    logger.error(f"[API] Generation API unavailable (status={exc.status}): {exc}")
    return error_response(502, str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    """Подключить обработчики к приложению."""
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(RequestValidationFailed, validation_failed_handler)
    app.add_exception_handler(EntityNotFoundError, not_found_handler)
    app.add_exception_handler(PipelineError, pipeline_error_handler)
    app.add_exception_handler(DomainValidationError, domain_validation_handler)
    app.add_exception_handler(GenerationUnavailable, generation_unavailable_handler)
