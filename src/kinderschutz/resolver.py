"""Response resolver: turns one user message into exactly one bot reply."""

import logging
import random
from typing import Any, Dict, Optional, Sequence

from . import messages
from .client import RemoteCompletionClient
from .models import CompletionResult, Origin, Turn
from .providers.base import CompletionError
from .safety import concern_reason, generate_safety_resources_message
from .services.cache import PatternCache

logger = logging.getLogger(__name__)


class ResponseResolver:
    """Orchestrates the safety check, canned replies and the remote model.

    Stages run in priority order and the first one that produces a reply ends
    the turn:

    1. Safety scanner: concerning input (or a concerning pattern in the last
       user turns) returns the fixed safety-resources message. Nothing is
       cached and no remote call is made.
    2. Pattern cache: an exact-match or canned reply is returned as is.
    3. Remote completion: the model reply (or its classified fallback) is
       returned and, where eligible, cached under the original input.

    Callers must not resolve two turns of the same conversation at once; the
    history passed in is never modified.
    """

    def __init__(
        self,
        client: RemoteCompletionClient,
        cache: Optional[PatternCache] = None,
        rng: Optional[random.Random] = None,
    ):
        self.client = client
        self.cache = cache if cache is not None else PatternCache()
        self.rng = rng or random.Random()
        self.safety_message = generate_safety_resources_message()

        # Statistics
        self.turns = 0
        self.concerns_detected = 0

    def resolve(self, user_text: str, history: Sequence[Turn] = ()) -> str:
        """Return the reply text for one user message. Never raises."""
        return self.resolve_with_origin(user_text, history).text

    def resolve_with_origin(
        self, user_text: str, history: Sequence[Turn] = ()
    ) -> CompletionResult:
        """Return the reply for one user message together with its origin."""
        self.turns += 1
        window = tuple(history)

        reason = concern_reason(user_text, window)
        if reason:
            self.concerns_detected += 1
            # Hook point for notifying a moderation team; only logged for now.
            logger.warning(
                "Concerning content detected in conversation",
                extra={"event": "concern_detected", "trigger": reason},
            )
            return CompletionResult(text=self.safety_message, origin=Origin.SAFETY)

        cached = self.cache.lookup(user_text)
        if cached is not None:
            logger.info("Using cached response")
            return CompletionResult(text=cached, origin=Origin.CACHE)

        deadline = self.client.deadline()
        try:
            result = self.client.complete(user_text, window, deadline=deadline)
        except Exception as e:
            logger.error(f"Error generating response: {type(e).__name__}: {e}", exc_info=True)
            return self._fallback_for(e)

        if result.cacheable:
            self.cache.store(user_text, result.text)
        return result

    def _fallback_for(self, error: Exception) -> CompletionResult:
        """Map an unexpected exception to a literal reply."""
        if isinstance(error, CompletionError):
            return CompletionResult(text=error.reply, origin=error.origin)
        if isinstance(error, TimeoutError):
            return CompletionResult(text=messages.TIMEOUT_MESSAGE, origin=Origin.TIMEOUT)
        if isinstance(error, ConnectionError):
            return CompletionResult(text=messages.NETWORK_ERROR_MESSAGE, origin=Origin.ERROR)
        return CompletionResult(
            text=self.rng.choice(messages.GENERIC_FALLBACK_MESSAGES), origin=Origin.ERROR
        )

    def get_stats(self) -> Dict[str, Any]:
        return {
            "turns": self.turns,
            "concerns_detected": self.concerns_detected,
            "cache": self.cache.get_stats(),
            "client": self.client.get_stats(),
        }
