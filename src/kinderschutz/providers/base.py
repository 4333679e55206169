"""Base classes and error taxonomy for completion providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .. import messages as replies
from ..models import Origin


@dataclass
class ProviderResponse:
    """Raw reply from a completion provider."""

    content: str
    model: str
    usage: Dict[str, int] = field(default_factory=dict)


class CompletionProvider(ABC):
    """Abstract base class for chat-completion providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the provider name."""
        ...

    @abstractmethod
    def complete(
        self,
        messages: List[Dict[str, str]],
        temperature: float = 0.4,
        max_tokens: Optional[int] = None,
    ) -> ProviderResponse:
        """Send a role-tagged message list and return the reply.

        Args:
            messages: OpenAI-style messages, system prompt first.
            temperature: Sampling temperature.
            max_tokens: Maximum tokens to generate.

        Returns:
            ProviderResponse with the reply text.

        Raises:
            CompletionError: If the request fails.
        """
        ...

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the provider has a usable credential."""
        ...


class CompletionError(Exception):
    """Base exception for everything that keeps a turn from a normal reply.

    Each subclass maps to exactly one child-appropriate reply text.
    """

    origin = Origin.ERROR
    reply = replies.SERVER_ERROR_MESSAGE
    needs_operator = False
    is_retryable = False

    def __init__(self, message: str, provider: str = ""):
        super().__init__(message)
        self.provider = provider


class MissingCredentialError(CompletionError):
    """Raised when no API key is configured."""

    origin = Origin.AUTH_ERROR
    reply = replies.MISSING_CREDENTIAL_MESSAGE
    needs_operator = True


class CompletionTimeoutError(CompletionError):
    """Raised when the deadline or the transport timeout expires."""

    origin = Origin.TIMEOUT
    reply = replies.TIMEOUT_MESSAGE
    is_retryable = True


class RemoteAuthRejectedError(CompletionError):
    """Raised when the remote service rejects the credential (401/403)."""

    origin = Origin.AUTH_ERROR
    reply = replies.AUTH_REJECTED_MESSAGE
    needs_operator = True


class RemoteServerError(CompletionError):
    """Raised when the remote service answers with any other error status."""

    def __init__(self, message: str, provider: str = "", status_code: Optional[int] = None):
        super().__init__(message, provider)
        self.status_code = status_code


class TransportFailureError(CompletionError):
    """Raised when the remote service cannot be reached."""

    reply = replies.NETWORK_ERROR_MESSAGE
    is_retryable = True


class EmptyResponseError(CompletionError):
    """Raised when the remote service returns no usable text."""

    reply = replies.EMPTY_RESPONSE_MESSAGE


class OutputFilterRejectedError(CompletionError):
    """Raised when a reply fails the output safety filter."""

    origin = Origin.FALLBACK
    reply = replies.FILTERED_OUTPUT_MESSAGE
