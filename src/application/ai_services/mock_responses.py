# -*- coding: utf-8 -*-
# =============================================================================
# Путь: src/application/ai_services/mock_responses.py
# =============================================================================
"""
Детерминированные синтетические ответы.

Подставляются клиентом генерации, когда модель вернула текст,
который не удалось разобрать как JSON. Каждый ответ проходит
валидацию соответствующей схемы из schemas.py.
"""

import copy
from typing import Any, Dict, Union

from src.application.ai_services.prompts import TOPIC_MARKER
from src.application.ai_services.schemas import TaskType

DEFAULT_TOPIC = "Modern Technology Trends"


def extract_topic(prompt: str) -> str:
    """Тема из строки промпта после "about:" или тема по умолчанию."""
    if TOPIC_MARKER in prompt:
        topic = prompt.split(TOPIC_MARKER, 1)[1].split("\n", 1)[0].strip()
        if topic:
            return topic
    return DEFAULT_TOPIC


def generate_mock_article_content(prompt: str) -> str:
    """Markdown-статья-заглушка по теме из промпта."""
    topic = extract_topic(prompt)
    lower = topic.lower()

    return f"""# {topic}

## Introduction

In today's rapidly evolving digital landscape, understanding {lower} has become crucial for professionals across all industries. This comprehensive guide explores the key aspects, implications, and future prospects of this important subject.

## Background and Context

{topic} has gained significant attention in recent years due to its transformative potential. Industry experts predict that this trend will continue to reshape how we work, communicate, and solve complex problems.

## Key Developments

### Current State

The current state of {lower} reflects a mature yet rapidly evolving field. Organizations worldwide are investing heavily in related technologies and methodologies to stay competitive.

### Emerging Trends

Several emerging trends are shaping the future of {lower}:

- **Innovation Acceleration**: New developments are emerging at an unprecedented pace
- **Integration Focus**: Greater emphasis on seamless integration with existing systems
- **User-Centric Design**: Prioritizing user experience and accessibility
- **Sustainability Considerations**: Environmental and social impact awareness

## Practical Applications

Real-world applications of {lower} demonstrate its versatility and potential:

1. **Enterprise Solutions**: Large organizations leveraging these concepts for operational efficiency
2. **Small Business Adoption**: Smaller companies finding innovative ways to implement solutions
3. **Individual Use Cases**: Personal applications that enhance daily productivity

## Challenges and Opportunities

### Current Challenges

- Technical complexity and implementation barriers
- Resource allocation and investment requirements
- Skills gap and training needs
- Integration with legacy systems

### Future Opportunities

- Market expansion and new business models
- Cross-industry collaboration potential
- Innovation in user interfaces and experiences
- Global accessibility and democratization

## Best Practices

Based on industry research and expert insights, consider these best practices:

- Start with small-scale pilot projects
- Invest in team training and development
- Maintain focus on user needs and feedback
- Plan for scalability from the beginning
- Monitor performance and iterate regularly

## Future Outlook

The future of {lower} looks promising, with continued investment and innovation expected. Key areas to watch include technological advancement, regulatory developments, and changing user expectations.

## Conclusion

{topic} represents a significant opportunity for organizations and individuals willing to embrace change and innovation. By understanding the current landscape and preparing for future developments, stakeholders can position themselves for success in this evolving field.

Success in {lower} requires a balanced approach combining technical expertise, strategic thinking, and user-focused design. As the field continues to evolve, staying informed and adaptable will be key to maximizing benefits and minimizing risks."""


_TRENDING = {
    "trending_topics": [
        {
            "headline": "AI Revolution in Modern Technology",
            "significance_score": 8.5,
            "trend_velocity": "rising_fast",
            "key_angles": ["automation", "machine learning", "future of work"],
            "target_keywords": ["artificial intelligence", "AI technology", "automation"],
            "estimated_interest": "high",
        },
        {
            "headline": "Digital Transformation Trends",
            "significance_score": 7.8,
            "trend_velocity": "steady_rise",
            "key_angles": ["digital innovation", "business transformation", "technology adoption"],
            "target_keywords": ["digital transformation", "innovation", "technology"],
            "estimated_interest": "high",
        },
    ]
}

_PREDICTION = {
    "predicted_metrics": {
        "estimated_views": "5,000-10,000",
        "estimated_read_ratio": 0.65,
        "estimated_claps": "150-300",
        "viral_potential": "moderate",
    },
    "success_factors": ["Trending topic", "Strong SEO", "Engaging title"],
    "improvement_recommendations": ["Add more visuals", "Include expert quotes", "Enhance social sharing"],
    "confidence_level": "high",
}


def get_mock_response(task_type: Union[TaskType, str], prompt: str = "") -> Dict[str, Any]:
    """
    Синтетический ответ для задачи.

    Args:
        task_type: Тип задачи
        prompt: Промпт, из которого берётся тема статьи

    Returns:
        Новый dict (можно безопасно мутировать)
    """
    try:
        task = TaskType(task_type)
    except ValueError:
        return {"error": "Mock data not available for this task type"}

    if task == TaskType.TRENDING_ANALYSIS:
        return copy.deepcopy(_TRENDING)

    if task == TaskType.PERFORMANCE_PREDICTION:
        return copy.deepcopy(_PREDICTION)

    content = generate_mock_article_content(prompt)

    if task == TaskType.ARTICLE_GENERATION:
        return {
            "title": "Understanding Modern Technology Trends",
            "subtitle": "A comprehensive guide to navigating the digital landscape",
            "content": content,
            "tags": ["technology", "innovation", "digital", "trends", "future"],
            "estimated_read_time": "6 min read",
            "word_count": 1200,
            "seo_score": 8.5,
            "engagement_factors": ["compelling headline", "clear structure", "actionable insights"],
        }

    if task == TaskType.ARTICLE_SELECTION:
        return {
            "selected_article": {
                "article_index": 0,
                "title": "The Future of Technology: Trends to Watch",
                "subtitle": "Exploring the innovations that will shape tomorrow",
                "content": content,
                "tags": ["technology", "future", "innovation", "trends"],
                "estimated_read_time": "5 min read",
            },
            "selection_reasoning": {
                "quality_score": 8.7,
                "strengths": ["Strong SEO potential", "Engaging narrative", "Current relevance"],
                "optimization_suggestions": ["Add more statistics", "Include case studies", "Enhance conclusion"],
            },
        }

    return {
        "optimized_article": {
            "title": "The Future of Technology: Essential Trends Every Professional Should Know",
            "subtitle": "A comprehensive analysis of emerging technologies reshaping industries",
            "content": content,
            "tags": ["technology", "innovation", "future", "trends", "business"],
            "meta_description": (
                "Discover the key technology trends shaping the future. Learn how AI, "
                "automation, and digital transformation are revolutionizing industries."
            ),
            "estimated_read_time": "7 min read",
        },
        "optimization_applied": ["SEO title optimization", "Keyword integration", "Meta description enhancement"],
        "seo_improvements": ["Improved keyword density", "Enhanced readability", "Better structure"],
    }
