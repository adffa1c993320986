"""Web search tools: Exa proxy and contact extraction."""

from .contact_extractor import extract_contact_info
from .contracts import ContactInfo, WebSearchResponse, WebSearchResult
from .exa_service import WebSearchService
from .factory import create_web_search_service

__all__ = [
    "ContactInfo",
    "WebSearchResponse",
    "WebSearchResult",
    "WebSearchService",
    "create_web_search_service",
    "extract_contact_info",
]
