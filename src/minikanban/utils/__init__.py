"""Utility helpers."""

from .datetime import from_iso, now_iso, now_utc, parse_iso, to_iso
from .ids import new_id
from .text import clamp, normalize_search, safe_trim

__all__ = [
    "clamp",
    "from_iso",
    "new_id",
    "normalize_search",
    "now_iso",
    "now_utc",
    "parse_iso",
    "safe_trim",
    "to_iso",
]
