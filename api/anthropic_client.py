import time

import anthropic

from models.unified_response import CompletionResponse, TokenUsage
from utils.logger import get_logger

from .base_client import BaseAIClient

logger = get_logger(__name__)

_STOP_REASONS = {
    "end_turn": "stop",
    "stop_sequence": "stop",
    "max_tokens": "length",
}


class AnthropicClient(BaseAIClient):
    """
    A client for the Anthropic Messages API.
    """

    provider = "anthropic"

    def __init__(self, api_key: str, model_name: str = "claude-3-5-sonnet-20241022", **kwargs):
        """
        Initialize the Anthropic client.

        Args:
            api_key: The Anthropic API key
            model_name: The name of the model to use
            **kwargs: Additional keyword arguments (timeout_s)
        """
        super().__init__(api_key, model_name=model_name, **kwargs)
        self.client = anthropic.Anthropic(api_key=api_key, timeout=self.timeout_s, max_retries=0)

    def get_completion(self, prompt: str, **kwargs) -> CompletionResponse:
        """
        Get a completion from the Anthropic API.

        Args:
            prompt: The input prompt, sent as a single user message
            **kwargs: Additional parameters for the API call
                - model: Override the default model for this call
                - temperature: Controls randomness (0.0 to 1.0)
                - max_tokens: Maximum number of tokens to generate

        Returns:
            CompletionResponse with the concatenated text blocks, or with error set
        """
        model = kwargs.get('model', self.model_name)
        temperature = kwargs.get('temperature', 0.0)
        max_tokens = kwargs.get('max_tokens', 1024)
        start_time = time.time()

        try:
            message = self.client.messages.create(
                model=model,
                max_tokens=max_tokens,
                temperature=temperature,
                messages=[{"role": "user", "content": prompt}],
            )

            text = "".join(
                block.text for block in message.content if getattr(block, "type", None) == "text"
            )

            usage = TokenUsage()
            if getattr(message, 'usage', None):
                usage = TokenUsage(
                    prompt_tokens=message.usage.input_tokens,
                    completion_tokens=message.usage.output_tokens,
                )

            return CompletionResponse(
                text=text,
                provider=self.provider,
                model=model,
                latency_ms=self._measure_latency(start_time),
                token_usage=usage,
                finish_reason=_STOP_REASONS.get(message.stop_reason),
            )

        except Exception as e:
            error = self._normalize_error(e)
            logger.error(
                f"Anthropic completion failed: {error.message}",
                extra={"extra_fields": {"provider": self.provider, "code": error.code}},
            )
            return CompletionResponse.failed(error, model, self._measure_latency(start_time))
