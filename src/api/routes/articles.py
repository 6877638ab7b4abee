"""
FastAPI Routes для статей.
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_article_service, get_command_handler, get_preview_service
from src.api.schemas.article_schemas import (
    ApiResponse,
    BatchGenerateRequest,
    GenerateAdvancedRequest,
    LegacyGenerateRequest,
    PreviewRequest,
)
from src.application.handlers.article_command_handler import ArticleCommandHandler
from src.application.queries.get_article_query import (
    GetArticleQuery,
    ListArticlesQuery,
    SearchArticlesQuery,
)
from src.application.services.article_service import ArticleService
from src.application.services.preview_service import PreviewService
from src.domain.value_objects.content_length import ContentLength
from src.domain.value_objects.tone import Tone

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/articles", tags=["articles"])


# =============================================================================
# Генерация
# =============================================================================

@router.post("/generate-advanced", response_model=ApiResponse, status_code=201)
async def generate_advanced_article(
    request: GenerateAdvancedRequest,
    handler: ArticleCommandHandler = Depends(get_command_handler)
):
    """Полный прогон конвейера для одной темы."""
    command = request.to_command(request.topic)
    article = await handler.handle_generate(command)

    data = {
        "success": True,
        "id": str(article.id),
        "article": article.result,
        "trending_topics_analyzed": article.trending_topics_analyzed,
        "candidates_generated": article.candidates_generated,
        "processing_time_ms": article.processing_time_ms,
        "parameters_used": {"topic": command.topic, **command.parameters_used()},
        "seo_metadata": article.seo_metadata,
    }
    if article.performance_prediction:
        data["performance_prediction"] = article.performance_prediction

    return ApiResponse(message="Advanced article generated successfully", data=data)


@router.post("/generate-batch", response_model=ApiResponse, status_code=201)
async def generate_batch_articles(
    request: BatchGenerateRequest,
    handler: ArticleCommandHandler = Depends(get_command_handler)
):
    """Последовательная генерация для 1-5 тем."""
    result = await handler.handle_generate_batch(request.to_batch_command())
    return ApiResponse(message="Batch articles generated successfully", data=result)


@router.post("/generate", response_model=ApiResponse, status_code=201)
async def generate_article(
    request: LegacyGenerateRequest,
    handler: ArticleCommandHandler = Depends(get_command_handler)
):
    """Старый формат генерации."""
    result = await handler.handle_legacy_generate(request.to_command())
    return ApiResponse(message="Article generated successfully", data=result)


# =============================================================================
# Шаблоны и предпросмотр
# =============================================================================

@router.get("/templates", response_model=ApiResponse)
async def get_templates(preview: PreviewService = Depends(get_preview_service)):
    return ApiResponse(message="Templates retrieved successfully", data=preview.get_templates())


@router.post("/preview", response_model=ApiResponse)
async def preview_article(
    request: PreviewRequest,
    preview: PreviewService = Depends(get_preview_service)
):
    """Предпросмотр без обращения к LLM."""
    data = preview.preview(request.topic, request.keywords, request.tone)
    return ApiResponse(message="Article preview generated successfully", data=data)


# =============================================================================
# Чтение
# =============================================================================

@router.get("", response_model=ApiResponse)
async def list_articles(
    topic: Optional[str] = None,
    tone: Optional[Tone] = None,
    length: Optional[ContentLength] = None,
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    service: ArticleService = Depends(get_article_service)
):
    """Список статей с фильтрами и пагинацией."""
    query = ListArticlesQuery(topic=topic, tone=tone, length=length, limit=limit, offset=offset)
    data = await service.list_articles(query)
    return ApiResponse(message="Articles retrieved successfully", data=data)


@router.get("/search", response_model=ApiResponse)
async def search_articles(
    topic: Optional[str] = None,
    service: ArticleService = Depends(get_article_service)
):
    """Поиск по подстроке темы."""
    articles = await service.search_articles(SearchArticlesQuery(topic=topic or ""))
    return ApiResponse(
        message="Articles found successfully",
        data=[a.to_dict() for a in articles],
    )


@router.get("/stats", response_model=ApiResponse)
async def get_article_stats(service: ArticleService = Depends(get_article_service)):
    stats = await service.get_stats()
    return ApiResponse(message="Article statistics retrieved successfully", data=stats)


@router.get("/{article_id}", response_model=ApiResponse)
async def get_article(
    article_id: UUID,
    service: ArticleService = Depends(get_article_service)
):
    """Получить статью по ID."""
    article = await service.get_article(GetArticleQuery(article_id=article_id))
    return ApiResponse(message="Article retrieved successfully", data=article.to_dict())


@router.delete("/{article_id}", response_model=ApiResponse)
async def delete_article(
    article_id: UUID,
    service: ArticleService = Depends(get_article_service)
):
    """Удалить статью."""
    await service.delete_article(GetArticleQuery(article_id=article_id))
    return ApiResponse(message="Article deleted successfully", data=None)
