"""Remote completion client: prompt assembly, deadline and error classification."""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Dict, List, Optional, Sequence

from .models import CompletionResult, Origin, Turn, recent_turns
from .providers.base import (
    CompletionError,
    CompletionProvider,
    CompletionTimeoutError,
    MissingCredentialError,
    OutputFilterRejectedError,
)
from .safety import is_safe_output

logger = logging.getLogger(__name__)

CHILD_SAFE_SYSTEM_PROMPT = """You are KinderSchutz-Bot, a friendly and supportive assistant designed specifically for children.
Your role is to provide a safe space for children to discuss their experiences and concerns, particularly sensitive topics like experiences of sexual violence in sports, clubs, or schools.

IMPORTANT SAFETY GUIDELINES:
1. Always maintain child-appropriate language and tone
2. Be supportive and empathetic but never judgmental
3. Never ask for or store personal identifying information
4. Recognize signs of distress or danger and provide appropriate resources
5. Encourage children to speak with trusted adults when appropriate
6. Prioritize child safety and well-being above all else
7. Respond in the same language the child is using (German or English)
8. Keep responses brief and easy to understand - use short paragraphs and simple language
9. Be patient and give clear, concrete advice when needed

If a child discloses information suggesting they are in danger or have experienced abuse:
- Validate their feelings and courage in sharing
- Provide age-appropriate support resources
- Gently encourage them to talk to a trusted adult
- Never minimize their experiences or suggest they are at fault"""

CONTEXT_TURNS = 5
TEMPERATURE = 0.4
MAX_TOKENS = 500
DEFAULT_TIMEOUT = 15.0


def build_messages(
    user_text: str, window: Sequence[Turn], system_prompt: str = CHILD_SAFE_SYSTEM_PROMPT
) -> List[Dict[str, str]]:
    """Build the role-tagged message list for one turn."""
    messages = [{"role": "system", "content": system_prompt}]
    for turn in recent_turns(window, CONTEXT_TURNS):
        messages.append({"role": turn.role, "content": turn.text})
    messages.append({"role": "user", "content": user_text})
    return messages


class RemoteCompletionClient:
    """Issues one completion request per turn and classifies the outcome.

    The provider call runs on a worker thread and races the turn's deadline.
    When the deadline wins, the in-flight call is abandoned: its result, if it
    ever arrives, is dropped.
    """

    def __init__(
        self,
        provider: CompletionProvider,
        timeout: float = DEFAULT_TIMEOUT,
        max_workers: int = 4,
    ):
        self.provider = provider
        self.timeout = timeout
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="completion"
        )

        # Statistics
        self.total_calls = 0
        self.outcomes: Dict[str, int] = {}

    def deadline(self) -> float:
        """Return a monotonic deadline for a turn starting now."""
        return time.monotonic() + self.timeout

    def complete(
        self, user_text: str, window: Sequence[Turn], deadline: Optional[float] = None
    ) -> CompletionResult:
        """Produce exactly one classified reply for `user_text`."""
        try:
            content = self._request(user_text, window, deadline)
            if not is_safe_output(content):
                raise OutputFilterRejectedError("Reply rejected by output filter")
            result = CompletionResult(text=content, origin=Origin.API)
        except CompletionError as e:
            logger.warning(f"Completion classified as {e.origin.value}: {type(e).__name__}")
            result = CompletionResult(text=e.reply, origin=e.origin)

        self.outcomes[result.origin.value] = self.outcomes.get(result.origin.value, 0) + 1
        return result

    def _request(self, user_text: str, window: Sequence[Turn], deadline: Optional[float]) -> str:
        if not self.provider.is_available():
            raise MissingCredentialError("No API key configured", provider=self.provider.name)

        if deadline is None:
            deadline = self.deadline()
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise CompletionTimeoutError("Deadline expired before the request was sent")

        messages = build_messages(user_text, window)
        self.total_calls += 1
        future = self._executor.submit(
            self.provider.complete, messages, temperature=TEMPERATURE, max_tokens=MAX_TOKENS
        )
        try:
            response = future.result(timeout=remaining)
        except FutureTimeoutError:
            future.cancel()
            logger.warning(f"{self.provider.name} did not answer within {remaining:.1f}s")
            raise CompletionTimeoutError("Request timeout", provider=self.provider.name)

        return response.content

    def get_stats(self) -> Dict[str, object]:
        return {
            "provider": self.provider.name,
            "timeout": self.timeout,
            "total_calls": self.total_calls,
            "outcomes": dict(self.outcomes),
        }

    def close(self) -> None:
        """Release the worker pool without waiting for abandoned calls."""
        self._executor.shutdown(wait=False, cancel_futures=True)
