import time

import openai

from models.unified_response import CompletionResponse, TokenUsage
from utils.logger import get_logger

from .base_client import BaseAIClient

logger = get_logger(__name__)


class OpenAIClient(BaseAIClient):
    """
    A client for interacting with the OpenAI API.
    Handles API calls and response processing.
    """

    provider = "openai"

    def __init__(self, api_key: str, model_name: str = "gpt-4o-mini", **kwargs):
        """
        Initialize the OpenAI client.

        Args:
            api_key: The OpenAI API key
            model_name: The name of the model to use (default: gpt-4o-mini)
            **kwargs: Additional keyword arguments (timeout_s)
        """
        super().__init__(api_key, model_name=model_name, **kwargs)
        # Single-shot calls: the caller owns the failure policy
        self.client = openai.OpenAI(api_key=api_key, timeout=self.timeout_s, max_retries=0)

    def get_completion(self, prompt: str, **kwargs) -> CompletionResponse:
        """
        Get a completion from the OpenAI API.

        Args:
            prompt: The input prompt to send to the model
            **kwargs: Additional parameters for the API call
                - model: Override the default model for this call
                - temperature: Controls randomness (0.0 to 2.0)
                - max_tokens: Maximum number of tokens to generate

        Returns:
            CompletionResponse with text and token usage, or with error set
        """
        model = kwargs.get('model', self.model_name)
        temperature = kwargs.get('temperature', 0.0)
        max_tokens = kwargs.get('max_tokens', 1024)
        start_time = time.time()

        try:
            response = self.client.chat.completions.create(
                model=model,
                messages=[{"role": "user", "content": prompt}],
                temperature=temperature,
                max_tokens=max_tokens,
            )

            usage = TokenUsage()
            if getattr(response, 'usage', None):
                usage = TokenUsage(
                    prompt_tokens=response.usage.prompt_tokens,
                    completion_tokens=response.usage.completion_tokens,
                    total_tokens=response.usage.total_tokens,
                )

            choice = response.choices[0]
            return CompletionResponse(
                text=choice.message.content or "",
                provider=self.provider,
                model=model,
                latency_ms=self._measure_latency(start_time),
                token_usage=usage,
                finish_reason=choice.finish_reason,
            )

        except Exception as e:
            error = self._normalize_error(e)
            logger.error(
                f"OpenAI completion failed: {error.message}",
                extra={"extra_fields": {"provider": self.provider, "code": error.code}},
            )
            return CompletionResponse.failed(error, model, self._measure_latency(start_time))
