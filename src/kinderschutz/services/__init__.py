"""Service components for the chat pipeline."""

from .cache import COMMON_PATTERNS, CannedPattern, PatternCache

__all__ = [
    "COMMON_PATTERNS",
    "CannedPattern",
    "PatternCache",
]
