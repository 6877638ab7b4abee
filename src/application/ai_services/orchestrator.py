# -*- coding: utf-8 -*-
"""
Оркестратор конвейера генерации статей.

Пять последовательных этапов:
1. Трендовые темы          - ошибка прерывает запрос (NoTrendsFound)
2. Кандидаты (по одному)   - ошибка кандидата пропускается, нет ни одного - AllCandidatesFailed
3. Выбор                   - нет selected_article - SelectionFailed
4. Оптимизация (опция)     - ошибка: остаётся результат выбора
5. Прогноз (опция)         - ошибка: поле отсутствует

Этапы и цикл кандидатов строго последовательны.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from src.application.ai_services.agents import (
    ArticleSelectorAgent,
    ArticleWriterAgent,
    PerformancePredictorAgent,
    SEOOptimizerAgent,
    TrendAnalystAgent,
)
from src.application.commands.generate_article_command import GenerateArticleCommand
from src.application.services.seo_service import SEOService
from src.domain.entities.article import Article
from src.domain.repositories.article_repository import IArticleRepository
from src.shared.exceptions.domain_exceptions import AllCandidatesFailed, NoTrendsFound

if TYPE_CHECKING:
    from src.infrastructure.ai.generation_client import GenerationClient

logger = logging.getLogger(__name__)


@dataclass
class StageAttempt:
    """Информация о прогоне одного этапа."""
    stage: str
    success: bool
    error: Optional[str] = None
    response_time: float = 0.0

    def __str__(self) -> str:
        status = "OK" if self.success else "FAIL"
        suffix = f" - {self.error}" if self.error else ""
        return f"[{status}] {self.stage} ({self.response_time:.2f}s){suffix}"


@dataclass
class ProcessingStats:
    """Статистика одного прогона конвейера."""
    topic: str
    attempts: List[StageAttempt] = field(default_factory=list)
    total_time: float = 0.0
    success: bool = False
    error: Optional[str] = None

    def record(self, stage: str, started: float, error: Optional[str] = None) -> None:
        self.attempts.append(StageAttempt(
            stage=stage,
            success=error is None,
            error=error,
            response_time=time.time() - started,
        ))


class ArticlePipelineOrchestrator:
    """
    Координатор пяти агентов и хранилища.

    Агенты создаются лениво и делят один GenerationClient.
    """

    def __init__(
            self,
            client: "GenerationClient",
            repository: IArticleRepository,
            seo_service: Optional[SEOService] = None
    ):
        self.client = client
        self.repository = repository
        self.seo_service = seo_service or SEOService()

        # Агенты (ленивая инициализация)
        self._trend_analyst: Optional[TrendAnalystAgent] = None
        self._writer: Optional[ArticleWriterAgent] = None
        self._selector: Optional[ArticleSelectorAgent] = None
        self._optimizer: Optional[SEOOptimizerAgent] = None
        self._predictor: Optional[PerformancePredictorAgent] = None

        self.runs_total = 0
        self.runs_failed = 0

    # =========================================================================
    # Ленивая инициализация агентов
    # =========================================================================

    @property
    def trend_analyst(self) -> TrendAnalystAgent:
        if self._trend_analyst is None:
            self._trend_analyst = TrendAnalystAgent(self.client)
        return self._trend_analyst

    @property
    def writer(self) -> ArticleWriterAgent:
        if self._writer is None:
            self._writer = ArticleWriterAgent(self.client)
        return self._writer

    @property
    def selector(self) -> ArticleSelectorAgent:
        if self._selector is None:
            self._selector = ArticleSelectorAgent(self.client)
        return self._selector

    @property
    def optimizer(self) -> SEOOptimizerAgent:
        if self._optimizer is None:
            self._optimizer = SEOOptimizerAgent(self.client)
        return self._optimizer

    @property
    def predictor(self) -> PerformancePredictorAgent:
        if self._predictor is None:
            self._predictor = PerformancePredictorAgent(self.client)
        return self._predictor

    # =========================================================================
    # Конвейер
    # =========================================================================

    async def generate(self, command: GenerateArticleCommand) -> Article:
        """
        Полный прогон конвейера для одной темы.

        Args:
            command: Параметры генерации

        Returns:
            Сохранённая статья

        Raises:
            NoTrendsFound, AllCandidatesFailed, SelectionFailed: Терминальные ошибки этапов
            GenerationUnavailable: LLM API недоступен на обязательном этапе
        """
        start_time = time.time()
        stats = ProcessingStats(topic=command.topic)
        self.runs_total += 1

        logger.info(
            f"[Orchestrator] Processing: '{command.topic}' "
            f"(count={command.article_count}, length={command.content_length.value}, "
            f"tone={command.tone.value})"
        )

        try:
            # =========================================================
            # ШАГ 1: Трендовые темы
            # =========================================================
            logger.info("[Orchestrator] Step 1: Trend discovery...")
            step_start = time.time()

            trending_topics = await self.trend_analyst.process(
                topic=command.topic,
                search_depth=command.search_depth,
                recency_hours=command.recency_hours,
                exclude_sources=command.exclude_sources,
            )
            if not trending_topics:
                stats.record("trend_discovery", step_start, "no topics")
                raise NoTrendsFound("No trending topics found for the specified criteria")

            stats.record("trend_discovery", step_start)
            logger.info(f"[Orchestrator] Trends: {len(trending_topics)}")

            # =========================================================
            # ШАГ 2: Кандидаты
            # =========================================================
            max_candidates = min(command.article_count, len(trending_topics))
            logger.info(f"[Orchestrator] Step 2: Generating {max_candidates} candidates...")

            candidates: List[Dict[str, Any]] = []
            for i, trending_topic in enumerate(trending_topics[:max_candidates]):
                step_start = time.time()
                try:
                    candidate = await self.writer.process(
                        trending_topic=trending_topic,
                        content_length=command.content_length,
                        tone=command.tone.value,
                        seo_keywords=command.seo_keywords,
                        custom_prompt=command.custom_prompt_addition,
                    )
                except Exception as e:
                    stats.record(f"candidate_{i + 1}", step_start, str(e)[:100])
                    logger.warning(f"[Orchestrator] Candidate {i + 1} failed: {e}")
                    continue

                stats.record(f"candidate_{i + 1}", step_start)
                candidates.append(candidate)

            if not candidates:
                raise AllCandidatesFailed("All article generation attempts failed")

            logger.info(f"[Orchestrator] Candidates: {len(candidates)}/{max_candidates}")

            # =========================================================
            # ШАГ 3: Выбор
            # =========================================================
            logger.info("[Orchestrator] Step 3: Selection...")
            step_start = time.time()

            final_result = await self.selector.process(
                candidates=candidates,
                topic=command.topic,
                quality_threshold=command.quality_threshold,
            )
            stats.record("selection", step_start)

            # =========================================================
            # ШАГ 4: Оптимизация
            # =========================================================
            if command.auto_optimize:
                logger.info("[Orchestrator] Step 4: Optimization...")
                optimized = await self._optimize(final_result, command, stats)
                if optimized is not None:
                    final_result = optimized

            # =========================================================
            # ШАГ 5: Прогноз
            # =========================================================
            performance_prediction = None
            if command.include_analytics:
                logger.info("[Orchestrator] Step 5: Performance prediction...")
                performance_prediction = await self._predict(final_result, command, stats)

            # =========================================================
            # Сохранение
            # =========================================================
            final_article = final_result.get("optimized_article") or final_result["selected_article"]
            seo_metadata = self.seo_service.generate_metadata(
                topic=command.topic,
                content=final_article["content"],
                keywords=_split_keywords(command.seo_keywords),
            )

            article = Article(
                topic=command.topic,
                content_length=command.content_length,
                tone=command.tone,
                search_depth=command.search_depth,
                recency_hours=command.recency_hours,
                quality_threshold=command.quality_threshold,
                seo_keywords=command.seo_keywords,
                auto_optimize=command.auto_optimize,
                include_analytics=command.include_analytics,
                custom_prompt_addition=command.custom_prompt_addition,
                exclude_sources=command.exclude_sources,
                trending_topics_analyzed=len(trending_topics),
                candidates_generated=len(candidates),
                processing_time_ms=int((time.time() - start_time) * 1000),
                result=final_result,
                performance_prediction=performance_prediction,
                seo_metadata=seo_metadata,
            )
            await self.repository.save(article)

            stats.success = True
            stats.total_time = time.time() - start_time
            self._log_final_stats(article, stats)
            return article

        except Exception as e:
            self.runs_failed += 1
            stats.error = str(e)
            stats.total_time = time.time() - start_time
            logger.error(f"[Orchestrator] Failed '{command.topic}' after {stats.total_time:.2f}s: {e}")
            raise

    async def _optimize(
            self,
            selection: Dict[str, Any],
            command: GenerateArticleCommand,
            stats: ProcessingStats
    ) -> Optional[Dict[str, Any]]:
        """Этап 4. None - оставить результат выбора."""
        step_start = time.time()
        try:
            result = await self.optimizer.process(
                selection=selection,
                topic=command.topic,
                seo_keywords=command.seo_keywords,
            )
        except Exception as e:
            stats.record("optimization", step_start, str(e)[:100])
            logger.warning(f"[Orchestrator] Optimization failed, using selected article: {e}")
            return None

        optimized = result["optimized_article"]
        if not optimized["title"].strip() or not optimized["content"].strip():
            stats.record("optimization", step_start, "empty optimized article")
            logger.warning("[Orchestrator] Optimized article is empty, using selected article")
            return None

        stats.record("optimization", step_start)
        return result

    async def _predict(
            self,
            final_result: Dict[str, Any],
            command: GenerateArticleCommand,
            stats: ProcessingStats
    ) -> Optional[Dict[str, Any]]:
        """Этап 5. None - прогноза нет."""
        step_start = time.time()
        article = final_result.get("optimized_article") or final_result["selected_article"]
        try:
            prediction = await self.predictor.process(article=article, topic=command.topic)
        except Exception as e:
            stats.record("prediction", step_start, str(e)[:100])
            logger.warning(f"[Orchestrator] Performance prediction failed: {e}")
            return None

        stats.record("prediction", step_start)
        return prediction

    def _log_final_stats(self, article: Article, stats: ProcessingStats) -> None:
        """Финальная статистика."""
        logger.info(f"[Orchestrator] DONE: {article.id}")
        logger.info(f"  Title: {article.title[:50]}...")
        logger.info(f"  Trends: {article.trending_topics_analyzed}, candidates: {article.candidates_generated}")
        logger.info(f"  Optimized: {'Yes' if article.is_optimized else 'No'}")
        logger.info(f"  Time: {stats.total_time:.2f}s")
        logger.info("  Stages:")
        for attempt in stats.attempts:
            logger.info(f"    {attempt}")

    def get_stats(self) -> Dict[str, Any]:
        """Статистика оркестратора."""
        return {
            "runs_total": self.runs_total,
            "runs_failed": self.runs_failed,
            "client": self.client.get_metrics(),
            "agents": {
                agent.agent_name: agent.get_metrics()
                for agent in (self._trend_analyst, self._writer, self._selector,
                              self._optimizer, self._predictor)
                if agent is not None
            },
        }


def _split_keywords(seo_keywords: str) -> List[str]:
    return [k.strip() for k in seo_keywords.split(",") if k.strip()]
