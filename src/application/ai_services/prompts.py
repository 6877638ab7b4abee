# -*- coding: utf-8 -*-
# =============================================================================
# Путь: src/application/ai_services/prompts.py
# =============================================================================
"""
Библиотека промптов и JSON схем.

Чистые функции без состояния и I/O:
    build_prompt(task_type, **params) -> str
    schema_for(task_type) -> dict | None

Раздел "формат ответа" в каждом промпте рендерится из той же Pydantic
модели, из которой строится схема, поэтому они не расходятся.
"""

import copy
import json
import typing
from typing import Any, Callable, Dict, List, Optional, Type, Union

from pydantic import BaseModel

from src.application.ai_services.schemas import TASK_SCHEMAS, TaskType
from src.domain.value_objects.content_length import ContentLength

SYSTEM_PERSONA = (
    "You are an expert content creator and digital marketing specialist. "
    "Provide accurate, engaging, and well-structured responses."
)

JSON_INSTRUCTION = (
    "\n\nIMPORTANT: Please respond only with valid JSON format. Do not include any "
    "markdown formatting, code blocks, or explanatory text - just pure JSON."
)

# Маркер темы: синтетический ответ берёт тему из строки после "about:"
TOPIC_MARKER = "about:"


# =============================================================================
# Схемы
# =============================================================================

def _resolve_task(task_type: Union[TaskType, str]) -> Optional[TaskType]:
    try:
        return TaskType(task_type)
    except ValueError:
        return None


def _strict(node: Any, defs: Dict[str, Any]) -> Any:
    """Инлайнить $ref, убрать title/default/examples, запретить лишние поля."""
    if isinstance(node, list):
        return [_strict(item, defs) for item in node]
    if not isinstance(node, dict):
        return node

    if "$ref" in node:
        name = node["$ref"].split("/")[-1]
        return _strict(copy.deepcopy(defs[name]), defs)

    result = {}
    for key, value in node.items():
        if key in ("title", "default", "examples", "$defs"):
            continue
        if key == "properties":
            # Имена полей (в т.ч. "title") не ключевые слова схемы
            result[key] = {name: _strict(sub, defs) for name, sub in value.items()}
        else:
            result[key] = _strict(value, defs)

    if result.get("type") == "object" and "properties" in result:
        result["required"] = list(result["properties"].keys())
        result["additionalProperties"] = False

    return result


def schema_for(task_type: Union[TaskType, str]) -> Optional[Dict[str, Any]]:
    """
    Strict JSON Schema дескриптор для response_format.

    Returns:
        {"name", "strict": True, "schema"} или None для неизвестной задачи
    """
    task = _resolve_task(task_type)
    if task is None:
        return None

    raw = TASK_SCHEMAS[task].model_json_schema()
    defs = raw.get("$defs", {})

    return {
        "name": task.value,
        "strict": True,
        "schema": _strict(raw, defs),
    }


# =============================================================================
# Рендер контракта из модели
# =============================================================================

def _example_for(annotation: Any, description: str, examples: Optional[List[Any]]) -> Any:
    if examples:
        return examples[0]

    origin = typing.get_origin(annotation)
    if origin in (list, List):
        (item,) = typing.get_args(annotation) or (str,)
        if isinstance(item, type) and issubclass(item, BaseModel):
            return [example_payload(item)]
        return [f"<{description or 'item'}>"]

    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return example_payload(annotation)

    return f"<{description or 'value'}>"


def example_payload(schema: Type[BaseModel]) -> Dict[str, Any]:
    """Пример JSON-объекта для модели (значения из examples у полей)."""
    example = {}
    for name, info in schema.model_fields.items():
        example[name] = _example_for(info.annotation, info.description or "", info.examples)
    return example


def render_contract(task_type: Union[TaskType, str]) -> str:
    """JSON-пример ответа для вставки в промпт."""
    task = _resolve_task(task_type)
    if task is None:
        return "{}"
    return json.dumps(example_payload(TASK_SCHEMAS[task]), ensure_ascii=False, indent=2)


# =============================================================================
# Промпты
# =============================================================================

def _trending_prompt(
        topic: str,
        search_depth: int = 10,
        recency_hours: int = 24,
        exclude_sources: str = "",
        **_: Any
) -> str:
    exclude = f"Exclude sources from: {exclude_sources}\n\n" if exclude_sources else ""
    return f"""Analyze the latest trending news and topics related to: {topic}

Focus on content from the last {recency_hours} hours. Find the top {search_depth} most significant, newsworthy developments.

{exclude}Return a JSON object of trending topics with this structure:
{render_contract(TaskType.TRENDING_ANALYSIS)}

Prioritize topics with high engagement potential and newsworthiness."""


def _candidate_prompt(
        headline: str,
        target_keywords: Optional[List[str]] = None,
        content_length: Union[ContentLength, str] = ContentLength.MEDIUM,
        tone: str = "professional",
        seo_keywords: str = "",
        custom_prompt: str = "",
        **_: Any
) -> str:
    spec = ContentLength(content_length).spec
    extra_seo = f"- Additional SEO keywords: {seo_keywords}\n" if seo_keywords else ""
    extra = f"\nADDITIONAL INSTRUCTIONS: {custom_prompt}\n" if custom_prompt else ""

    return f"""Write a high-quality article {TOPIC_MARKER} {headline}

ARTICLE SPECIFICATIONS:
- Length: {spec.words} words
- Tone: {tone}
- Structure: {spec.sections} main sections
- Target keywords: {', '.join(target_keywords or [])}
{extra_seo}
CONTENT REQUIREMENTS:
- Hook readers with compelling opening
- Include data, statistics, and expert insights
- Add personal anecdotes or case studies where relevant
- Use subheadings for better readability
- Include actionable takeaways
- End with thought-provoking conclusion

PUBLISHING OPTIMIZATION:
- Write engaging headlines that encourage clicks
- Use bullet points and numbered lists strategically
- Include relevant quotes and examples
- Optimize for reader engagement and SEO
{extra}
Return structured JSON with complete article content, metadata, and SEO elements:
{render_contract(TaskType.ARTICLE_GENERATION)}"""


def _selection_prompt(
        candidates: List[Dict[str, Any]],
        topic: str,
        quality_threshold: float = 7.0,
        **_: Any
) -> str:
    return f"""Analyze these article candidates and select the best one for publication.

TOPIC: {topic}
QUALITY THRESHOLD: {quality_threshold}/10

CANDIDATES:
{json.dumps(candidates, ensure_ascii=False, indent=2)}

EVALUATION CRITERIA:
- Content quality and depth (weight: 30%)
- SEO potential and keyword optimization (weight: 25%)
- Reader engagement factors (headline, structure, readability) (weight: 25%)
- Uniqueness and fresh perspective (weight: 10%)
- Trending topic relevance (weight: 10%)

Return JSON with the selected article plus detailed analysis:
{render_contract(TaskType.ARTICLE_SELECTION)}"""


def _optimization_prompt(
        title: str,
        content: str,
        topic: str,
        seo_keywords: str = "",
        suggestions: Optional[List[str]] = None,
        **_: Any
) -> str:
    seo = f"- Target SEO keywords: {seo_keywords}\n" if seo_keywords else ""
    return f"""Optimize this article for SEO and engagement:

ORIGINAL ARTICLE:
Title: {title}
Content: {content}

OPTIMIZATION REQUIREMENTS:
- Topic focus: {topic}
{seo}- Apply these suggestions: {', '.join(suggestions or [])}

TASKS:
1. PROOFREADING: Fix grammar, spelling, flow, and readability
2. SEO OPTIMIZATION:
   - Optimize title for clicks and SEO
   - Integrate keywords naturally
   - Improve meta description
   - Enhance subheadings with keywords
3. PUBLISHING OPTIMIZATION:
   - Improve engagement factors
   - Add compelling calls-to-action
   - Optimize reading experience

Return the fully optimized article in JSON format with all improvements applied:
{render_contract(TaskType.ARTICLE_OPTIMIZATION)}"""


def _prediction_prompt(
        title: str,
        topic: str,
        content: str = "",
        tags: Optional[List[str]] = None,
        **_: Any
) -> str:
    words = len(content.split()) if content else "unknown"
    return f"""Analyze this article and predict its performance:

ARTICLE ANALYSIS:
Title: {title}
Topic: {topic}
Content length: {words} words
Tags: {', '.join(tags or [])}

PREDICTION FACTORS:
- Title click-through potential
- Content engagement factors
- SEO ranking potential
- Publishing platform compatibility
- Trending topic alignment
- Reader retention likelihood

Provide detailed performance prediction with actionable insights for future improvements:
{render_contract(TaskType.PERFORMANCE_PREDICTION)}"""


_BUILDERS: Dict[TaskType, Callable[..., str]] = {
    TaskType.TRENDING_ANALYSIS: _trending_prompt,
    TaskType.ARTICLE_GENERATION: _candidate_prompt,
    TaskType.ARTICLE_SELECTION: _selection_prompt,
    TaskType.ARTICLE_OPTIMIZATION: _optimization_prompt,
    TaskType.PERFORMANCE_PREDICTION: _prediction_prompt,
}


def build_prompt(task_type: Union[TaskType, str], **params: Any) -> str:
    """
    Построить промпт для задачи.

    Args:
        task_type: Тип задачи
        **params: Параметры конкретного промпта

    Raises:
        ValueError: Неизвестный тип задачи
    """
    task = _resolve_task(task_type)
    if task is None:
        raise ValueError(f"Unknown task type: {task_type}")
    return _BUILDERS[task](**params)
