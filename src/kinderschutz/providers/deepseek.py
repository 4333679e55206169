"""DeepSeek provider using the OpenAI-compatible chat-completions API."""

import logging
import os
from typing import Dict, List, Optional

import httpx
import openai
from openai import OpenAI

from .base import (
    CompletionProvider,
    CompletionTimeoutError,
    EmptyResponseError,
    MissingCredentialError,
    ProviderResponse,
    RemoteAuthRejectedError,
    RemoteServerError,
    TransportFailureError,
)

logger = logging.getLogger(__name__)

DEEPSEEK_BASE_URL = "https://api.deepseek.com/v1"
DEFAULT_MODEL = "deepseek-chat"
CONNECT_TIMEOUT = 5.0


class DeepSeekProvider(CompletionProvider):
    """Completion provider talking to DeepSeek through the OpenAI SDK."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        base_url: str = DEEPSEEK_BASE_URL,
        timeout: float = 15.0,
    ):
        """Initialize the DeepSeek provider.

        Args:
            api_key: DeepSeek API key. If None, reads from DEEPSEEK_API_KEY env var.
            model: Model to use for every request.
            base_url: Base URL of the OpenAI-compatible API.
            timeout: Transport timeout in seconds.
        """
        self.api_key = api_key if api_key is not None else os.getenv("DEEPSEEK_API_KEY")
        self.model = model
        self.base_url = base_url
        self.timeout = timeout
        self._client: Optional[OpenAI] = None

    @property
    def name(self) -> str:
        return "deepseek"

    @property
    def client(self) -> OpenAI:
        """Get or create the OpenAI client configured for DeepSeek."""
        if self._client is None:
            if not self.is_available():
                raise MissingCredentialError(
                    "DeepSeek API key not configured. Set DEEPSEEK_API_KEY environment variable.",
                    provider=self.name,
                )
            self._client = OpenAI(
                base_url=self.base_url,
                api_key=self.api_key,
                timeout=httpx.Timeout(self.timeout, connect=min(CONNECT_TIMEOUT, self.timeout)),
                max_retries=0,
            )
        return self._client

    def complete(
        self,
        messages: List[Dict[str, str]],
        temperature: float = 0.4,
        max_tokens: Optional[int] = None,
    ) -> ProviderResponse:
        """Send one chat-completion request.

        Raises:
            MissingCredentialError: If no API key is configured.
            CompletionTimeoutError: If the transport times out.
            RemoteAuthRejectedError: If the key is rejected.
            RemoteServerError: For any other error status.
            TransportFailureError: If the service cannot be reached.
            EmptyResponseError: If the reply carries no text.
        """
        client = self.client
        logger.info(
            f"Sending request to {self.name}: model={self.model}, messages={len(messages)}, "
            f"key=sk-*** (length: {len(self.api_key or '')})"
        )

        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except openai.APITimeoutError as e:
            logger.warning(f"{self.name} request timed out after {self.timeout}s")
            raise CompletionTimeoutError(str(e), provider=self.name) from e
        except openai.APIConnectionError as e:
            logger.error(f"{self.name} connection error: {e}")
            raise TransportFailureError(str(e), provider=self.name) from e
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            logger.error(f"{self.name} authentication failed (status {e.status_code})")
            raise RemoteAuthRejectedError(str(e), provider=self.name) from e
        except openai.APIStatusError as e:
            logger.error(f"{self.name} error status {e.status_code}: {e.body}")
            raise RemoteServerError(str(e), provider=self.name, status_code=e.status_code) from e

        if not response.choices:
            raise EmptyResponseError("Response contained no choices", provider=self.name)

        content = response.choices[0].message.content or ""
        if not content.strip():
            raise EmptyResponseError("Response contained no text", provider=self.name)

        usage = {}
        if response.usage:
            usage = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens,
            }

        logger.info(f"Received response from {self.name} ({len(content)} chars)")
        return ProviderResponse(content=content, model=self.model, usage=usage)

    def is_available(self) -> bool:
        """Check if an API key is configured (blank counts as missing)."""
        return bool(self.api_key and self.api_key.strip())
