import re
import time
from abc import ABC, abstractmethod

from models.unified_response import CompletionResponse, NormalizedError


class BaseAIClient(ABC):
    """
    Abstract base class for language-model clients.

    Concrete clients wrap one provider SDK and return a CompletionResponse.
    get_completion never raises: provider failures are reported through
    CompletionResponse.error.
    """

    provider: str = "unknown"

    @abstractmethod
    def __init__(self, api_key: str, **kwargs):
        """
        Initialize the AI client.

        Args:
            api_key: API key for the AI service
            **kwargs: Additional model-specific parameters
                - model_name: Default model for completions
                - timeout_s: Per-request timeout in seconds
        """
        if not api_key:
            raise ValueError(f"API key is required for {self.provider}")
        self.api_key = api_key
        self.model_name = kwargs.get('model_name')
        self.timeout_s = kwargs.get('timeout_s', 30.0)

    @abstractmethod
    def get_completion(self, prompt: str, **kwargs) -> CompletionResponse:
        """
        Get a completion from the AI model.

        Args:
            prompt: The input prompt to send to the model
            **kwargs: Additional parameters for the API call
                - model: Override the default model for this call
                - temperature: Controls randomness
                - max_tokens: Maximum number of tokens to generate

        Returns:
            CompletionResponse with text, or with error set on failure
        """

    @staticmethod
    def _measure_latency(start_time: float) -> int:
        return int((time.time() - start_time) * 1000)

    def _normalize_error(self, exc: Exception, provider: str | None = None) -> NormalizedError:
        """
        Map an SDK exception onto the shared error codes.

        SDKs disagree on exception classes, so the type name and message are
        inspected rather than the class hierarchy.
        """
        provider = provider or self.provider
        name = type(exc).__name__.lower()
        message = str(exc)
        lowered = message.lower()

        if isinstance(exc, TimeoutError) or "timeout" in name or "timed out" in lowered:
            code, retryable = "timeout", True
        elif re.search(r"\b401\b|\b403\b|unauthori[sz]ed|authentication|permission", lowered) or (
            "authentication" in name or "permission" in name
        ):
            code, retryable = "auth", False
        elif re.search(r"\b429\b|rate.?limit|too many requests", lowered) or "ratelimit" in name:
            code, retryable = "rate_limit", True
        elif re.search(r"\b400\b|bad request|invalid request", lowered) or "badrequest" in name:
            code, retryable = "bad_request", False
        elif re.search(r"\b5\d\d\b|unavailable|overloaded|server error", lowered) or (
            "connection" in name or "internalserver" in name
        ):
            code, retryable = "provider_error", True
        else:
            code, retryable = "unknown", False

        return NormalizedError(
            code=code,
            message=message or type(exc).__name__,
            provider=provider,
            retryable=retryable,
            details={"exception_type": type(exc).__name__},
        )
