"""Text helpers shared by the reducer, import pipeline and query engine."""

import re
import unicodedata

_WHITESPACE = re.compile(r"\s+")


def safe_trim(text: str) -> str:
    """
    Collapse whitespace runs to a single space and trim the ends.

    Example: "  Fix   pump \\n" -> "Fix pump"
    """
    return _WHITESPACE.sub(" ", text).strip()


def normalize_search(text: str) -> str:
    """
    Strip accents and lower-case text for search matching.

    Only used for comparisons, never for stored values.
    Example: "Mecánica" -> "mecanica"
    """
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return stripped.lower()


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into the inclusive range [low, high]."""
    return max(low, min(high, value))
