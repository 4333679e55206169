"""Data models shared across the chat pipeline."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Tuple


class Sender(str, Enum):
    """Who produced a turn."""

    USER = "user"
    BOT = "bot"


class Origin(str, Enum):
    """Which pipeline stage produced a reply."""

    API = "api"
    FALLBACK = "fallback"
    TIMEOUT = "timeout"
    AUTH_ERROR = "auth_error"
    ERROR = "error"
    # Reported by the resolver only, never by the completion client
    SAFETY = "safety"
    CACHE = "cache"


@dataclass(frozen=True)
class Turn:
    """A single message in a conversation."""

    sender: Sender
    text: str
    is_error: bool = False

    def __post_init__(self):
        if self.sender is Sender.USER and not self.text.strip():
            raise ValueError("User turns must have non-empty text")

    @property
    def role(self) -> str:
        """Chat-completion role for this turn."""
        return "user" if self.sender is Sender.USER else "assistant"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Turn":
        """Create a Turn from the wire shape used by chat front ends."""
        try:
            sender = Sender(data.get("sender"))
        except ValueError:
            raise ValueError(f"Unknown sender: {data.get('sender')!r}")

        text = data.get("text")
        if not isinstance(text, str):
            raise ValueError("Turn text must be a string")

        return cls(sender=sender, text=text, is_error=bool(data.get("isError", False)))

    def to_dict(self) -> Dict[str, Any]:
        return {"sender": self.sender.value, "text": self.text, "isError": self.is_error}


def user_turns(turns: Iterable[Turn], limit: int) -> List[Turn]:
    """Return the last `limit` user turns in chronological order."""
    users = [turn for turn in turns if turn.sender is Sender.USER]
    return users[-limit:] if limit > 0 else []


def recent_turns(turns: Iterable[Turn], limit: int) -> Tuple[Turn, ...]:
    """Return the last `limit` turns regardless of sender."""
    window = tuple(turns)
    return window[-limit:] if limit > 0 else ()


@dataclass(frozen=True)
class CompletionResult:
    """One terminal reply for a turn."""

    text: str
    origin: Origin

    @property
    def cacheable(self) -> bool:
        """Only model replies and filtered redirects are worth remembering."""
        return self.origin in (Origin.API, Origin.FALLBACK)
