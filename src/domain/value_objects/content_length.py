"""
Value Object: ContentLength

Целевой объём статьи и его параметры генерации.
"""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class LengthSpec:
    """Параметры генерации для объёма статьи."""
    words: str
    sections: int
    max_tokens: int


class ContentLength(str, Enum):
    """Допустимые объёмы статьи."""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"

    @property
    def spec(self) -> LengthSpec:
        """Диапазон слов, число разделов и бюджет токенов."""
        return LENGTH_SPECS[self]

    @classmethod
    def from_word_count(cls, word_count: int) -> "ContentLength":
        """
        Корзина по числу слов (legacy API).

        >1500 → long, >1000 → medium, иначе short.
        """
        if word_count > 1500:
            return cls.LONG
        if word_count > 1000:
            return cls.MEDIUM
        return cls.SHORT


LENGTH_SPECS = {
    ContentLength.SHORT: LengthSpec(words="800-1200", sections=4, max_tokens=1500),
    ContentLength.MEDIUM: LengthSpec(words="1200-1800", sections=6, max_tokens=2000),
    ContentLength.LONG: LengthSpec(words="1800-2500", sections=8, max_tokens=2500),
}
