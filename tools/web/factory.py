"""Factory for creating the Exa web search service from configuration."""

from config.config import Config
from models.errors import ConfigurationError
from utils.logger import get_logger

from .exa_client import ExaSearchClient
from .exa_service import WebSearchService

logger = get_logger(__name__)


def create_web_search_service(config: Config) -> WebSearchService:
    """
    Create the web search service.

    Settings used:
        EXA_API_KEY: Exa API key (required)
        WEB_SEARCH_TIMEOUT_S: Provider call timeout in seconds (default: 30)

    Raises:
        ConfigurationError: If EXA_API_KEY is not set
    """
    if not config.EXA_API_KEY:
        logger.error("EXA_API_KEY environment variable is not set")
        raise ConfigurationError(
            "Exa API key not configured. Please add EXA_API_KEY to the service environment.",
            details="Set EXA_API_KEY in the .env file or the deployment secrets, then restart.",
        )

    return WebSearchService(
        client=ExaSearchClient(api_key=config.EXA_API_KEY),
        timeout_s=config.WEB_SEARCH_TIMEOUT_S,
    )
