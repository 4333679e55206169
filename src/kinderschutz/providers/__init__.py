"""Chat-completion providers for the KinderSchutz chat core."""

from .base import (
    CompletionError,
    CompletionProvider,
    CompletionTimeoutError,
    EmptyResponseError,
    MissingCredentialError,
    OutputFilterRejectedError,
    ProviderResponse,
    RemoteAuthRejectedError,
    RemoteServerError,
    TransportFailureError,
)
from .deepseek import DeepSeekProvider

__all__ = [
    "CompletionError",
    "CompletionProvider",
    "CompletionTimeoutError",
    "DeepSeekProvider",
    "EmptyResponseError",
    "MissingCredentialError",
    "OutputFilterRejectedError",
    "ProviderResponse",
    "RemoteAuthRejectedError",
    "RemoteServerError",
    "TransportFailureError",
]
