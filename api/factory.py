"""Factory for the language-model client used by case analysis."""

from config.config import API_KEY_SETTINGS, Config, ModelType
from utils.logger import get_logger

from .base_client import BaseAIClient

logger = get_logger(__name__)


def _build_client(model_type: str, api_key: str, **kwargs) -> BaseAIClient:
    # Import lazily so only the selected provider's SDK is loaded
    if model_type == ModelType.ANTHROPIC.value:
        from .anthropic_client import AnthropicClient

        return AnthropicClient(api_key, **kwargs)
    if model_type == ModelType.OPENAI.value:
        from .openai_client import OpenAIClient

        return OpenAIClient(api_key, **kwargs)

    from .google_gemini_client import GeminiClient

    return GeminiClient(api_key, **kwargs)


def create_ai_client_from_config(config: Config) -> BaseAIClient | None:
    """
    Build the client for config.MODEL_TYPE.

    Returns None, with a warning, when MODEL_TYPE is unsupported, the
    provider's API key is missing or the client cannot be built. Case
    analysis then degrades instead of failing the search.
    """
    model_type = config.MODEL_TYPE
    if model_type not in API_KEY_SETTINGS:
        logger.warning(
            f"Unknown MODEL_TYPE '{model_type}', case analysis disabled. "
            f"Must be one of: {', '.join(e.value for e in ModelType)}"
        )
        return None

    api_key = config.model_api_key
    if not api_key:
        logger.warning(
            f"{API_KEY_SETTINGS[model_type]} not configured, case analysis disabled",
            extra={"extra_fields": {"provider": model_type}},
        )
        return None

    kwargs = {"model_name": config.DEFAULT_MODEL, "timeout_s": config.CASE_ANALYSIS_TIMEOUT_S}

    try:
        client = _build_client(model_type, api_key, **kwargs)
    except Exception as e:
        logger.warning(
            f"Could not initialize {model_type} client, case analysis disabled: {e}",
            exc_info=True,
            extra={"extra_fields": {"provider": model_type}},
        )
        return None

    logger.info(f"Case analysis using {config.get_model_info()}")
    return client
