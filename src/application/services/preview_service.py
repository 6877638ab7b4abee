"""
Application Service: шаблоны статей и предпросмотр.

Детерминированные ответы без обращения к LLM.
"""

import math
from typing import Any, Dict, List, Optional, Union

from src.domain.value_objects.tone import Tone

TEMPLATES: List[Dict[str, Any]] = [
    {
        "id": "how-to-guide",
        "name": "How-To Guide",
        "description": "Step-by-step instructional content",
        "structure": ["Introduction", "Prerequisites", "Step-by-step guide", "Conclusion"],
        "recommended_tone": "professional",
        "recommended_length": "medium",
    },
    {
        "id": "listicle",
        "name": "Listicle",
        "description": "List-based article format",
        "structure": ["Introduction", "List items with explanations", "Conclusion"],
        "recommended_tone": "engaging",
        "recommended_length": "medium",
    },
    {
        "id": "opinion-piece",
        "name": "Opinion Piece",
        "description": "Personal perspective or analysis",
        "structure": ["Hook", "Background", "Main argument", "Supporting points", "Conclusion"],
        "recommended_tone": "conversational",
        "recommended_length": "long",
    },
    {
        "id": "news-analysis",
        "name": "News Analysis",
        "description": "Analysis of current events or trends",
        "structure": ["Summary", "Background", "Analysis", "Implications", "Conclusion"],
        "recommended_tone": "analytical",
        "recommended_length": "long",
    },
    {
        "id": "tutorial",
        "name": "Technical Tutorial",
        "description": "In-depth technical guide",
        "structure": ["Overview", "Setup", "Implementation", "Examples", "Best Practices", "Conclusion"],
        "recommended_tone": "authoritative",
        "recommended_length": "long",
    },
    {
        "id": "case-study",
        "name": "Case Study",
        "description": "Real-world example analysis",
        "structure": ["Challenge", "Solution", "Implementation", "Results", "Lessons Learned"],
        "recommended_tone": "professional",
        "recommended_length": "medium",
    },
]

_TITLES = {
    Tone.PROFESSIONAL: "Mastering {topic}: A Comprehensive Guide",
    Tone.CASUAL: "Everything You Need to Know About {topic}",
    Tone.ANALYTICAL: "An Analysis of {topic}: Current Trends and Future Implications",
    Tone.CONVERSATIONAL: "Let's Talk About {topic}: What You Should Know",
    Tone.AUTHORITATIVE: "The Definitive Guide to {topic}",
    Tone.ENGAGING: "Unlocking the Secrets of {topic}: A Journey of Discovery",
}

_SUBTITLES = {
    Tone.PROFESSIONAL: "Learn the essential strategies and best practices for {topic}",
    Tone.CASUAL: "A friendly guide to getting started with {topic}",
    Tone.ANALYTICAL: "Examining the key factors and methodologies in {topic}",
    Tone.CONVERSATIONAL: "An honest discussion about {topic} and what it means for you",
    Tone.AUTHORITATIVE: "Expert insights and proven approaches to {topic}",
    Tone.ENGAGING: "Explore the fascinating world of {topic} and its endless possibilities",
}

# Минут чтения на раздел плана
_MINUTES_PER_SECTION = 2


def _resolve_tone(tone: Union[Tone, str, None]) -> Tone:
    try:
        return Tone(tone)
    except ValueError:
        return Tone.PROFESSIONAL


class PreviewService:
    """Шаблоны и предпросмотр статьи."""

    def get_templates(self) -> List[Dict[str, Any]]:
        return [dict(t) for t in TEMPLATES]

    def title(self, topic: str, tone: Union[Tone, str, None] = None) -> str:
        return _TITLES[_resolve_tone(tone)].format(topic=topic)

    def subtitle(self, topic: str, tone: Union[Tone, str, None] = None) -> str:
        return _SUBTITLES[_resolve_tone(tone)].format(topic=topic.lower())

    def outline(self, topic: str) -> Dict[str, Any]:
        return {
            "sections": [
                {"title": "Introduction", "description": f"Overview of {topic}"},
                {"title": "Background", "description": "Historical context and current state"},
                {"title": "Key Concepts", "description": "Fundamental principles and ideas"},
                {"title": "Best Practices", "description": "Proven strategies and approaches"},
                {"title": "Case Studies", "description": "Real-world examples and applications"},
                {"title": "Future Trends", "description": "Emerging developments and predictions"},
                {"title": "Conclusion", "description": "Summary and key takeaways"},
            ]
        }

    def preview(
            self,
            topic: str,
            keywords: Optional[List[str]] = None,
            tone: Union[Tone, str, None] = None
    ) -> Dict[str, Any]:
        """
        Предпросмотр: заголовок, подзаголовок, план и оценка времени чтения.
        """
        outline = self.outline(topic)
        return {
            "title": self.title(topic, tone),
            "subtitle": self.subtitle(topic, tone),
            "outline": outline,
            "estimatedReadTime": math.ceil(len(outline["sections"]) * _MINUTES_PER_SECTION),
            "suggestedKeywords": list(keywords or []),
        }
