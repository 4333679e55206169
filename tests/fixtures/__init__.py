"""Test doubles for the KinderSchutz chat core tests."""

import threading
from typing import Dict, List, Optional

from kinderschutz.models import Sender, Turn
from kinderschutz.providers.base import CompletionProvider, ProviderResponse


class FakeProvider(CompletionProvider):
    """In-memory provider that records every request."""

    def __init__(
        self,
        reply: str = "Test response",
        error: Optional[Exception] = None,
        delay: float = 0.0,
        available: bool = True,
    ):
        self.reply = reply
        self.error = error
        self.delay = delay
        self.available = available
        self.calls: List[Dict] = []
        self.released = threading.Event()

    @property
    def name(self) -> str:
        return "fake"

    def complete(self, messages, temperature=0.4, max_tokens=None) -> ProviderResponse:
        self.calls.append(
            {"messages": messages, "temperature": temperature, "max_tokens": max_tokens}
        )
        if self.delay:
            # Returns early once a test releases it, so no thread outlives the suite
            self.released.wait(self.delay)
        if self.error is not None:
            raise self.error
        return ProviderResponse(content=self.reply, model="fake-model")

    def is_available(self) -> bool:
        return self.available


def user(text: str) -> Turn:
    return Turn(sender=Sender.USER, text=text)


def bot(text: str, is_error: bool = False) -> Turn:
    return Turn(sender=Sender.BOT, text=text, is_error=is_error)
