"""
Unit tests для ArticlePipelineOrchestrator.
"""

import pytest

from src.application.ai_services.orchestrator import ArticlePipelineOrchestrator
from src.application.ai_services.schemas import TaskType
from src.application.commands.generate_article_command import GenerateArticleCommand
from src.domain.value_objects.content_length import ContentLength
from src.shared.exceptions.domain_exceptions import (
    AllCandidatesFailed,
    NoTrendsFound,
    SelectionFailed,
)
from src.shared.exceptions.infrastructure_exceptions import GenerationUnavailable
from tests.fakes import ScriptedClient, make_trends


def build(script, repository):
    client = ScriptedClient(script)
    return client, ArticlePipelineOrchestrator(client, repository)


@pytest.mark.asyncio
async def test_healthcare_scenario_two_candidates(orchestrator, scripted_client, repository):
    """Тест сценария: 'AI in Healthcare', article_count=2."""
    article = await orchestrator.generate(GenerateArticleCommand(topic="AI in Healthcare", article_count=2))

    assert article.candidates_generated == 2
    assert article.trending_topics_analyzed >= 2
    assert len(scripted_client.calls_for(TaskType.ARTICLE_GENERATION)) == 2
    assert await repository.find_by_id(article.id) is article


@pytest.mark.asyncio
async def test_full_pipeline_result_shape(orchestrator):
    """Тест полного прогона: оптимизация и прогноз присутствуют."""
    article = await orchestrator.generate(GenerateArticleCommand(topic="Quantum computing"))

    assert article.is_optimized
    assert article.result["optimized_article"]["title"]
    assert article.result["synthetic"] is False
    assert article.performance_prediction["confidence_level"] == "high"
    assert article.seo_metadata["slug"] == "quantum-computing"
    assert article.status.value == "generated"


@pytest.mark.asyncio
async def test_candidates_bounded_by_trends(repository):
    """Тест: кандидатов не больше, чем трендов."""
    client, orchestrator = build({TaskType.TRENDING_ANALYSIS: [make_trends(1)]}, repository)

    article = await orchestrator.generate(GenerateArticleCommand(topic="Edge AI", article_count=5))

    assert article.trending_topics_analyzed == 1
    assert article.candidates_generated == 1
    assert len(client.calls_for(TaskType.ARTICLE_GENERATION)) == 1


@pytest.mark.asyncio
async def test_candidate_prompt_uses_trend_and_length(repository):
    """Тест: промпт кандидата строится по трендовой теме, бюджет по длине."""
    client, orchestrator = build({TaskType.TRENDING_ANALYSIS: [make_trends(1)]}, repository)

    await orchestrator.generate(GenerateArticleCommand(
        topic="Edge AI",
        content_length=ContentLength.LONG,
        custom_prompt_addition="Mention open source",
    ))

    call = client.calls_for(TaskType.ARTICLE_GENERATION)[0]
    assert "Write a high-quality article about: Trend 1" in call["prompt"]
    assert "1800-2500 words" in call["prompt"]
    assert "ADDITIONAL INSTRUCTIONS: Mention open source" in call["prompt"]
    assert call["max_output_tokens"] == 2500
    assert call["temperature"] == 0.7


@pytest.mark.asyncio
async def test_failed_candidate_is_skipped(repository):
    """Тест: ошибка одного кандидата не прерывает конвейер."""
    client, orchestrator = build({
        TaskType.TRENDING_ANALYSIS: [make_trends(3)],
        TaskType.ARTICLE_GENERATION: [GenerationUnavailable("boom", status=500)],
    }, repository)

    article = await orchestrator.generate(GenerateArticleCommand(topic="Robotics", article_count=3))

    assert article.candidates_generated == 2
    assert len(client.calls_for(TaskType.ARTICLE_GENERATION)) == 3


@pytest.mark.asyncio
async def test_all_candidates_failed(repository):
    """Тест: все кандидаты упали - запрос прерывается, ничего не сохранено."""
    client, orchestrator = build({
        TaskType.TRENDING_ANALYSIS: [make_trends(2)],
        TaskType.ARTICLE_GENERATION: [
            GenerationUnavailable("boom"),
            {"unexpected": "shape", "synthetic": False},
        ],
    }, repository)

    with pytest.raises(AllCandidatesFailed):
        await orchestrator.generate(GenerateArticleCommand(topic="Robotics", article_count=2))

    assert await repository.count() == 0
    assert client.calls_for(TaskType.ARTICLE_SELECTION) == []


@pytest.mark.asyncio
async def test_no_trends_found(repository):
    """Тест: пустой список трендов - NoTrendsFound."""
    client, orchestrator = build({
        TaskType.TRENDING_ANALYSIS: [{"trending_topics": [], "synthetic": False}],
    }, repository)

    with pytest.raises(NoTrendsFound):
        await orchestrator.generate(GenerateArticleCommand(topic="Nothing new"))

    assert client.calls_for(TaskType.ARTICLE_GENERATION) == []


@pytest.mark.asyncio
async def test_malformed_trends_are_dropped(repository):
    """Тест: некорректные темы отбрасываются, корректные остаются."""
    trends = make_trends(2)
    trends["trending_topics"].insert(0, {"headline": "No other fields"})
    client, orchestrator = build({TaskType.TRENDING_ANALYSIS: [trends]}, repository)

    article = await orchestrator.generate(GenerateArticleCommand(topic="Robotics", article_count=5))

    assert article.trending_topics_analyzed == 2


@pytest.mark.asyncio
async def test_trend_stage_unavailable_propagates(repository):
    """Тест: недоступность API на этапе 1 пробрасывается как есть."""
    client, orchestrator = build({
        TaskType.TRENDING_ANALYSIS: [GenerationUnavailable("API key not configured")],
    }, repository)

    with pytest.raises(GenerationUnavailable):
        await orchestrator.generate(GenerateArticleCommand(topic="Robotics"))


@pytest.mark.asyncio
async def test_selection_without_selected_article_aborts(repository):
    """Тест: ответ выбора без selected_article - SelectionFailed."""
    client, orchestrator = build({
        TaskType.ARTICLE_SELECTION: [{
            "selection_reasoning": {"quality_score": 9, "strengths": [], "optimization_suggestions": []},
            "synthetic": False,
        }],
    }, repository)

    with pytest.raises(SelectionFailed):
        await orchestrator.generate(GenerateArticleCommand(topic="Robotics"))

    assert await repository.count() == 0
    assert client.calls_for(TaskType.ARTICLE_OPTIMIZATION) == []


@pytest.mark.asyncio
async def test_selection_with_empty_content_aborts(repository):
    """Тест: выбранная статья без текста - SelectionFailed."""
    client, orchestrator = build({
        TaskType.ARTICLE_SELECTION: [{
            "selected_article": {
                "article_index": 0, "title": "T", "subtitle": "", "content": "  ",
                "tags": [], "estimated_read_time": "1 min read",
            },
            "selection_reasoning": {"quality_score": 9, "strengths": [], "optimization_suggestions": []},
            "synthetic": False,
        }],
    }, repository)

    with pytest.raises(SelectionFailed):
        await orchestrator.generate(GenerateArticleCommand(topic="Robotics"))


@pytest.mark.asyncio
async def test_auto_optimize_disabled(orchestrator, scripted_client):
    """Тест: auto_optimize=false - нет optimized_article и вызова оптимизации."""
    article = await orchestrator.generate(GenerateArticleCommand(topic="Robotics", auto_optimize=False))

    assert "optimized_article" not in article.result
    assert "selected_article" in article.result
    assert scripted_client.calls_for(TaskType.ARTICLE_OPTIMIZATION) == []


@pytest.mark.asyncio
async def test_optimization_failure_falls_back_to_selection(repository):
    """Тест: ошибка оптимизации - остаётся результат выбора."""
    client, orchestrator = build({
        TaskType.ARTICLE_OPTIMIZATION: [GenerationUnavailable("timeout")],
    }, repository)

    article = await orchestrator.generate(GenerateArticleCommand(topic="Robotics"))

    assert not article.is_optimized
    assert article.title == "The Future of Technology: Trends to Watch"
    assert await repository.count() == 1


@pytest.mark.asyncio
async def test_optimization_without_optimized_article_is_ignored(repository):
    """Тест: ответ оптимизации без optimized_article не принимается."""
    client, orchestrator = build({
        TaskType.ARTICLE_OPTIMIZATION: [{"optimization_applied": ["x"], "synthetic": False}],
    }, repository)

    article = await orchestrator.generate(GenerateArticleCommand(topic="Robotics"))

    assert not article.is_optimized


@pytest.mark.asyncio
async def test_prediction_failure_omits_field(repository):
    """Тест: ошибка прогноза - поле отсутствует, статья сохранена."""
    client, orchestrator = build({
        TaskType.PERFORMANCE_PREDICTION: [GenerationUnavailable("rate limited", status=429)],
    }, repository)

    article = await orchestrator.generate(GenerateArticleCommand(topic="Robotics"))

    assert article.performance_prediction is None
    assert await repository.count() == 1


@pytest.mark.asyncio
async def test_analytics_disabled(orchestrator, scripted_client):
    """Тест: include_analytics=false - прогноз не запрашивается."""
    article = await orchestrator.generate(GenerateArticleCommand(topic="Robotics", include_analytics=False))

    assert article.performance_prediction is None
    assert scripted_client.calls_for(TaskType.PERFORMANCE_PREDICTION) == []


@pytest.mark.asyncio
async def test_prediction_uses_optimized_article(orchestrator, scripted_client):
    """Тест: прогноз строится по оптимизированной статье."""
    await orchestrator.generate(GenerateArticleCommand(topic="Robotics"))

    prompt = scripted_client.calls_for(TaskType.PERFORMANCE_PREDICTION)[0]["prompt"]
    assert "Essential Trends Every Professional Should Know" in prompt


@pytest.mark.asyncio
async def test_stages_run_in_order(orchestrator, scripted_client):
    """Тест: этапы выполняются строго по порядку."""
    await orchestrator.generate(GenerateArticleCommand(topic="Robotics", article_count=2))

    assert [c["task_type"] for c in scripted_client.calls] == [
        TaskType.TRENDING_ANALYSIS,
        TaskType.ARTICLE_GENERATION,
        TaskType.ARTICLE_GENERATION,
        TaskType.ARTICLE_SELECTION,
        TaskType.ARTICLE_OPTIMIZATION,
        TaskType.PERFORMANCE_PREDICTION,
    ]


@pytest.mark.asyncio
async def test_get_stats_counts_runs(repository):
    """Тест статистики оркестратора."""
    client, orchestrator = build({
        TaskType.TRENDING_ANALYSIS: [{"trending_topics": [], "synthetic": False}],
    }, repository)

    with pytest.raises(NoTrendsFound):
        await orchestrator.generate(GenerateArticleCommand(topic="Robotics"))
    await orchestrator.generate(GenerateArticleCommand(topic="Robotics"))

    stats = orchestrator.get_stats()
    assert stats["runs_total"] == 2
    assert stats["runs_failed"] == 1
    assert "trend_analyst" in stats["agents"]
