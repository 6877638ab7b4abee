"""
Value Object: Tone

Тональность текста.
"""

from enum import Enum


class Tone(str, Enum):
    """Тональности основного API."""

    PROFESSIONAL = "professional"
    CASUAL = "casual"
    ANALYTICAL = "analytical"
    CONVERSATIONAL = "conversational"
    AUTHORITATIVE = "authoritative"
    ENGAGING = "engaging"


class LegacyTone(str, Enum):
    """Тональности старого API /generate."""

    PROFESSIONAL = "professional"
    CASUAL = "casual"
    ACADEMIC = "academic"
    CREATIVE = "creative"

    def to_tone(self) -> Tone:
        """Ближайшая тональность основного API."""
        return _LEGACY_TONE_MAP[self]


_LEGACY_TONE_MAP = {
    LegacyTone.PROFESSIONAL: Tone.PROFESSIONAL,
    LegacyTone.CASUAL: Tone.CASUAL,
    LegacyTone.ACADEMIC: Tone.ANALYTICAL,
    LegacyTone.CREATIVE: Tone.ENGAGING,
}
