"""Canned replies and a bounded cache of earlier answers."""

import logging
import re
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Pattern, Sequence

from ..safety import is_concerning

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CannedPattern:
    """A regular expression with the reply it triggers."""

    pattern: Pattern[str]
    response: str


# First match wins, so more specific patterns go first.
COMMON_PATTERNS = (
    CannedPattern(
        pattern=re.compile(r"^(hallo|hi|hey|guten tag|servus|moin)", re.IGNORECASE),
        response=(
            "Hallo! Schön, dass du da bist. Wie geht es dir heute? "
            "Du kannst mir alles erzählen, was dich beschäftigt."
        ),
    ),
    CannedPattern(
        pattern=re.compile(r"was kannst du|wofür bist du|wie funktionierst du", re.IGNORECASE),
        response=(
            "Ich bin FreundBot, dein digitaler Freund. Du kannst mit mir über alles reden, "
            "was dich beschäftigt. Ich kann dir zuhören, wenn du Sorgen hast oder über deine "
            "Erfahrungen sprechen möchtest. Wenn du Hilfe brauchst, kann ich dir auch sagen, "
            "wo du sie bekommen kannst. Worüber möchtest du sprechen?"
        ),
    ),
    CannedPattern(
        pattern=re.compile(r"danke|dankeschön|vielen dank", re.IGNORECASE),
        response=(
            "Gerne! Ich freue mich, dass ich dir helfen konnte. "
            "Gibt es noch etwas, worüber du sprechen möchtest?"
        ),
    ),
    CannedPattern(
        pattern=re.compile(r"tschüss|auf wiedersehen|bis später|bye|ciao", re.IGNORECASE),
        response=(
            "Tschüss! Es hat mich gefreut, mit dir zu sprechen. "
            "Komm jederzeit wieder, wenn du reden möchtest. Pass gut auf dich auf!"
        ),
    ),
)

MIN_INPUT_LENGTH = 4
MAX_INPUT_LENGTH = 99


class PatternCache:
    """Exact-match reply cache backed by a list of canned patterns.

    The exact-match layer evicts in insertion order (FIFO), not by recency of
    use. Inputs flagged by the safety scanner are never stored, so a disclosure
    cannot be echoed back to a later user.
    """

    def __init__(
        self,
        max_size: int = 100,
        patterns: Sequence[CannedPattern] = COMMON_PATTERNS,
        is_sensitive: Callable[[str], bool] = is_concerning,
    ):
        self.max_size = max_size
        self.patterns = tuple(patterns)
        self.is_sensitive = is_sensitive
        self.cache: OrderedDict[str, str] = OrderedDict()
        self.hits = 0
        self.pattern_hits = 0
        self.misses = 0
        self._lock = threading.Lock()

    @staticmethod
    def create_key(text: str) -> str:
        return text.lower()

    def is_eligible(self, text: str) -> bool:
        """Check the admission rule for the exact-match layer."""
        return MIN_INPUT_LENGTH <= len(text) <= MAX_INPUT_LENGTH and not self.is_sensitive(text)

    def lookup(self, text: str) -> Optional[str]:
        """Return a cached or canned reply, or None if nothing applies."""
        key = self.create_key(text)
        with self._lock:
            if key in self.cache:
                self.hits += 1
                return self.cache[key]

            for item in self.patterns:
                if item.pattern.search(text):
                    self.pattern_hits += 1
                    return item.response

            self.misses += 1
            return None

    def store(self, text: str, response: str) -> bool:
        """Remember a reply for `text` if it is eligible.

        Returns:
            True if the entry was admitted.
        """
        if not self.is_eligible(text):
            return False

        key = self.create_key(text)
        with self._lock:
            if key not in self.cache and len(self.cache) >= self.max_size:
                evicted, _ = self.cache.popitem(last=False)
                logger.debug(f"Evicted oldest cache entry ({len(evicted)} chars)")
            self.cache[key] = response
        return True

    def __len__(self) -> int:
        return len(self.cache)

    def __contains__(self, text: str) -> bool:
        return self.create_key(text) in self.cache

    def clear(self) -> None:
        """Clear all cached replies and statistics."""
        with self._lock:
            self.cache.clear()
            self.hits = 0
            self.pattern_hits = 0
            self.misses = 0

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        total_requests = self.hits + self.pattern_hits + self.misses
        return {
            "size": len(self.cache),
            "max_size": self.max_size,
            "hits": self.hits,
            "pattern_hits": self.pattern_hits,
            "misses": self.misses,
            "hit_rate": (self.hits + self.pattern_hits) / total_requests if total_requests > 0 else 0,
        }
