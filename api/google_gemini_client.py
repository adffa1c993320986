import time

from google import genai

from models.unified_response import CompletionResponse, TokenUsage
from utils.logger import get_logger

from .base_client import BaseAIClient

logger = get_logger(__name__)


class GeminiClient(BaseAIClient):
    """
    A client for the Google Gemini API using the google.genai package.
    """

    provider = "gemini"

    def __init__(self, api_key: str, model_name: str = "gemini-1.5-flash", **kwargs):
        """
        Initialize the Gemini client.

        Args:
            api_key: The Google Gemini API key
            model_name: The name of the model to use (default: gemini-1.5-flash)
            **kwargs: Additional keyword arguments (timeout_s)
        """
        super().__init__(api_key, model_name=model_name, **kwargs)
        # google.genai expects the timeout in milliseconds
        self.client = genai.Client(
            api_key=api_key,
            http_options={"timeout": int(self.timeout_s * 1000)},
        )

    def get_completion(self, prompt: str, **kwargs) -> CompletionResponse:
        """
        Get a completion from the Gemini API.

        Args:
            prompt: The input prompt to send to the model
            **kwargs: Additional parameters for the API call
                - model: Override the default model for this call
                - temperature: Controls randomness (0.0 to 1.0)
                - max_tokens: Maximum number of tokens to generate

        Returns:
            CompletionResponse with text and token usage, or with error set
        """
        model_name = kwargs.get('model', self.model_name)
        temperature = kwargs.get('temperature', 0.0)
        max_output_tokens = kwargs.get('max_tokens', 1024)
        start_time = time.time()

        try:
            response = self.client.models.generate_content(
                model=model_name,
                contents=prompt,
                config={
                    'temperature': temperature,
                    'max_output_tokens': max_output_tokens,
                },
            )

            usage = TokenUsage()
            usage_metadata = getattr(response, 'usage_metadata', None)
            if usage_metadata:
                usage = TokenUsage(
                    prompt_tokens=getattr(usage_metadata, 'prompt_token_count', 0) or 0,
                    completion_tokens=getattr(usage_metadata, 'candidates_token_count', 0) or 0,
                    total_tokens=getattr(usage_metadata, 'total_token_count', 0) or 0,
                )

            return CompletionResponse(
                text=getattr(response, 'text', None) or "",
                provider=self.provider,
                model=model_name,
                latency_ms=self._measure_latency(start_time),
                token_usage=usage,
                finish_reason="stop",
            )

        except Exception as e:
            error = self._normalize_error(e)
            logger.error(
                f"Gemini completion failed: {error.message}",
                extra={"extra_fields": {"provider": self.provider, "code": error.code}},
            )
            return CompletionResponse.failed(error, model_name, self._measure_latency(start_time))
