"""Last-line filter for model replies before they reach a child."""

import re

# Any single match rejects the reply. The first pattern lets "sexual violence",
# "sexual abuse" and "sexual harassment" through for safety education; it is
# kept exactly as is, so e.g. "sexually abusive" or "sex abuse" are rejected.
UNSAFE_OUTPUT_PATTERNS = (
    re.compile(r"sex(?!ual violence|ual abuse|ual harassment)", re.IGNORECASE),
    re.compile(r"porn", re.IGNORECASE),
    re.compile(r"explicit", re.IGNORECASE),
    re.compile(r"adult content", re.IGNORECASE),
    re.compile(r"nicht für kinder", re.IGNORECASE),
    re.compile(r"not appropriate for children", re.IGNORECASE),
    re.compile(r"kill yourself", re.IGNORECASE),
    re.compile(r"self-harm", re.IGNORECASE),
    re.compile(r"suicide", re.IGNORECASE),
)


def is_safe_output(text: str) -> bool:
    """Return False if the reply matches any blocked pattern."""
    return not any(pattern.search(text) for pattern in UNSAFE_OUTPUT_PATTERNS)
