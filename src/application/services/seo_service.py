"""
Application Service: SEO эвристики.

Локальные расчёты без вызовов LLM: мета-описание, ключевые слова,
slug, время чтения и оценка 0-100.
"""

import math
import re
import unicodedata
from collections import Counter
from typing import Any, Dict, List, Optional

WORDS_PER_MINUTE = 200
META_DESCRIPTION_LIMIT = 160
MAX_KEYWORDS = 15
DEFAULT_SLUG = "article"

_WORD_RE = re.compile(r"\b\w{4,}\b")
_HEADING_RE = re.compile(r"^#+\s", re.MULTILINE)
_LIST_ITEM_RE = re.compile(r"^[-*+]\s", re.MULTILINE)


def count_words(content: str) -> int:
    """Число слов, разделённых пробельными символами."""
    return len(content.split())


class SEOService:
    """SEO метаданные для готовой статьи."""

    def generate_metadata(
            self,
            topic: str,
            content: str,
            keywords: Optional[List[str]] = None
    ) -> Dict[str, Any]:
        """
        Полный набор SEO метаданных.

        Returns:
            {meta_description, keywords, slug, reading_time, seo_score}
        """
        keywords = keywords or []
        return {
            "meta_description": self.meta_description(content),
            "keywords": self.extract_keywords(content, keywords),
            "slug": self.slug(topic),
            "reading_time": self.reading_time(content),
            "seo_score": self.score(content, keywords),
        }

    def meta_description(self, content: str) -> str:
        """Первые два предложения длиннее 20 символов, не больше 160 символов."""
        sentences = [s for s in content.split(".") if len(s.strip()) > 20]
        description = ".".join(sentences[:2]).strip()

        if len(description) > META_DESCRIPTION_LIMIT:
            description = description[:META_DESCRIPTION_LIMIT - 3] + "..."

        return description

    def extract_keywords(self, content: str, provided: List[str]) -> List[str]:
        """Переданные ключевые слова + 10 самых частых слов от 4 букв."""
        counts = Counter(_WORD_RE.findall(content.lower()))
        frequent = [word for word, _ in counts.most_common(10)]

        merged: List[str] = []
        for word in list(provided) + frequent:
            if word not in merged:
                merged.append(word)

        return merged[:MAX_KEYWORDS]

    def slug(self, topic: str) -> str:
        """URL-slug темы. Буквы любых алфавитов сохраняются; пустой результат - "article"."""
        slug = unicodedata.normalize("NFKC", topic).lower()
        slug = re.sub(r"[^\w\s-]", "", slug)
        slug = re.sub(r"[\s_]+", "-", slug.strip())
        slug = re.sub(r"-+", "-", slug).strip("-")
        return slug or DEFAULT_SLUG

    def reading_time(self, content: str) -> Dict[str, Any]:
        """Время чтения при 200 словах в минуту."""
        minutes = math.ceil(count_words(content) / WORDS_PER_MINUTE)
        return {"minutes": minutes, "text": f"{minutes} min read"}

    def score(self, content: str, keywords: List[str]) -> int:
        """
        Оценка 0-100.

        +10 за каждое найденное ключевое слово, +20 за 1000-2000 слов
        (+10 от 500), по 5 за заголовок (до 20), по 2 за пункт списка (до 10).
        """
        score = 0
        lower = content.lower()

        for keyword in keywords:
            if keyword and keyword.lower() in lower:
                score += 10

        words = count_words(content)
        if 1000 <= words <= 2000:
            score += 20
        elif words >= 500:
            score += 10

        score += min(len(_HEADING_RE.findall(content)) * 5, 20)
        score += min(len(_LIST_ITEM_RE.findall(content)) * 2, 10)

        return min(score, 100)
