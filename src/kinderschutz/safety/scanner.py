"""Keyword tripwire for messages that may indicate a child needs help.

This is a low-precision, high-recall check: plain case-insensitive substring
containment, no stemming and no tokenization. It will fire on keywords inside
unrelated words ("team" in "teamwork") and miss synonyms or misspellings.
"""

from typing import Iterable, Optional

from ..models import Turn, user_turns


# Order and spelling are part of the observable behaviour; do not normalise.
CONCERN_KEYWORDS = (
    "missbrauch",
    "geschlagen",
    "angefasst",
    "berührt",
    "gewalt",
    "angst",
    "trainer",
    "lehrer",
    "verein",
    "mannschaft",
    "team",
    "schule",
    "wehtun",
    "wehtut",
    "weh tut",
    "hilfe",
    "allein",
    "geheimnis",
    "nicht sagen",
    "nicht erzählen",
    "nicht verraten",
    "droht",
    "nicht erlaubt",
    "gezwungen",
    "zwingen",
    "schlecht gefühl",
    "eklig",
    "ekelt",
    "traurig",
    "sexuell",
    "sexual",
    "not allowed",
    "touch",
)

PATTERN_WINDOW = 3
PATTERN_THRESHOLD = 2


def is_concerning(text: str) -> bool:
    """Check whether a single message contains any concern keyword."""
    lower_text = text.lower()
    return any(keyword in lower_text for keyword in CONCERN_KEYWORDS)


def has_pattern(turns: Iterable[Turn]) -> bool:
    """Check the last three user turns for a sustained concerning theme.

    Fires when at least two of them are individually concerning, even if no
    single message would be unambiguous on its own.
    """
    recent = user_turns(turns, PATTERN_WINDOW)
    concern_count = sum(1 for turn in recent if is_concerning(turn.text))
    return concern_count >= PATTERN_THRESHOLD


def concern_reason(text: str, turns: Iterable[Turn]) -> Optional[str]:
    """Return which check fired ("message" or "pattern"), or None."""
    if is_concerning(text):
        return "message"
    if has_pattern(turns):
        return "pattern"
    return None
