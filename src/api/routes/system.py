"""
FastAPI Routes: здоровье сервиса и конфигурация.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from src.api.dependencies import Container, get_container
from src.api.schemas.article_schemas import ApiResponse, ConfigureRequest
from src.domain.value_objects.content_length import ContentLength
from src.domain.value_objects.tone import Tone

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


async def health_payload(container: Container) -> dict:
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "api_key_configured": container.generation_config.api_key_configured,
        "api_version": container.settings.api_version,
        "uptime_seconds": container.uptime_seconds,
        "total_articles_generated": await container.repository.count(),
    }


@router.get("/health", response_model=ApiResponse)
async def health_check(container: Container = Depends(get_container)):
    """Расширенная проверка здоровья."""
    return ApiResponse(message="Service is healthy", data=await health_payload(container))


@router.post("/configure", response_model=ApiResponse)
async def configure(
    request: ConfigureRequest,
    container: Container = Depends(get_container)
):
    """Сменить ключ API без перезапуска."""
    await container.generation_config.set_api_key(request.openai_api_key)
    return ApiResponse(
        message="Configuration updated successfully",
        data={
            "message": "API key configured successfully",
            "api_key_configured": True,
        },
    )


@router.get("/config", response_model=ApiResponse)
async def get_config(container: Container = Depends(get_container)):
    """Эндпоинты, параметры и ограничения API."""
    settings = container.settings
    return ApiResponse(
        message="Configuration retrieved successfully",
        data={
            "endpoints": {
                "generate_advanced_article": "/api/v1/articles/generate-advanced",
                "generate_batch": "/api/v1/articles/generate-batch",
                "generate_article": "/api/v1/articles/generate",
                "preview": "/api/v1/articles/preview",
                "templates": "/api/v1/articles/templates",
                "health": "/health",
                "configure": "/api/v1/configure",
            },
            "parameters": {
                "required": ["topic"],
                "optional": [
                    "article_count", "content_length", "tone", "search_depth",
                    "recency_hours", "quality_threshold", "seo_keywords",
                    "auto_optimize", "include_analytics", "custom_prompt_addition",
                    "exclude_sources",
                ],
            },
            "limits": {
                "requests_per_minute": settings.rate_limit_per_minute,
                "max_topic_length": 200,
                "max_article_count": 5,
                "max_batch_topics": 5,
            },
            "valid_tones": [t.value for t in Tone],
            "valid_lengths": [length.value for length in ContentLength],
            "model": container.generation_config.snapshot().model,
            "api_version": settings.api_version,
        },
    )
