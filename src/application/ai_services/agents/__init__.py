# -*- coding: utf-8 -*-
"""
AI Агенты этапов конвейера генерации статей.

Один агент на этап:
1. TrendAnalystAgent - трендовые темы
2. ArticleWriterAgent - кандидаты
3. ArticleSelectorAgent - выбор
4. SEOOptimizerAgent - оптимизация
5. PerformancePredictorAgent - прогноз
"""

from src.application.ai_services.agents.base_agent import (
    AgentMetrics,
    BaseAgent,
    TaskType,
)
from src.application.ai_services.agents.trend_analyst_agent import TrendAnalystAgent
from src.application.ai_services.agents.article_writer_agent import ArticleWriterAgent
from src.application.ai_services.agents.article_selector_agent import ArticleSelectorAgent
from src.application.ai_services.agents.seo_optimizer_agent import SEOOptimizerAgent
from src.application.ai_services.agents.performance_predictor_agent import PerformancePredictorAgent

__all__ = [
    'AgentMetrics',
    'BaseAgent',
    'TaskType',
    'TrendAnalystAgent',
    'ArticleWriterAgent',
    'ArticleSelectorAgent',
    'SEOOptimizerAgent',
    'PerformancePredictorAgent',
]
