"""FastAPI dependencies: configuration, request context and search services."""

from collections.abc import Callable
from dataclasses import dataclass

from fastapi import Depends, Request

from config.config import Config, get_config
from server.utils import extract_bearer_token
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RequestContext:
    """Per-request values handed to route handlers."""

    request_id: str
    bearer_token: str | None = None

    @property
    def authenticated(self) -> bool:
        return self.bearer_token is not None


def get_request_context(request: Request) -> RequestContext:
    """Capture request ID and bearer token. Tokens are forwarded, not validated here."""
    return RequestContext(
        request_id=getattr(request.state, "request_id", "unknown"),
        bearer_token=extract_bearer_token(request),
    )


def get_app_config() -> Config:
    return get_config()


def get_expert_search_service(config: Config = Depends(get_app_config)):
    """Dependency to get the expert search service (singleton pattern)."""
    from api.factory import create_ai_client_from_config
    from db.directory import ExpertDirectory
    from matching.case_analyzer import CaseAnalyzer
    from matching.expert_search import ExpertSearchService

    if not hasattr(get_expert_search_service, "_instance"):
        analyzer = CaseAnalyzer(
            client=create_ai_client_from_config(config),
            timeout_s=config.CASE_ANALYSIS_TIMEOUT_S,
        )
        directory = ExpertDirectory(
            timeout_s=config.DIRECTORY_TIMEOUT_S, database_url=config.DATABASE_URL
        )
        get_expert_search_service._instance = ExpertSearchService(
            analyzer=analyzer,
            directory=directory,
            page_size=config.SEARCH_PAGE_SIZE,
        )
    return get_expert_search_service._instance


def get_web_search_service_factory(config: Config = Depends(get_app_config)) -> Callable:
    """
    Dependency returning a zero-argument factory for the web search service.

    Building is deferred so the route can reject a bad query before a
    missing EXA_API_KEY is reported.
    """
    from tools.web.factory import create_web_search_service

    def factory():
        if not hasattr(get_web_search_service_factory, "_instance"):
            get_web_search_service_factory._instance = create_web_search_service(config)
        return get_web_search_service_factory._instance

    return factory
