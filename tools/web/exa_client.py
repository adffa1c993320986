"""Exa API client for neural web search with page contents.

Exa returns, per result:
- Full page text (JavaScript-rendered, boilerplate stripped)
- Highlighted snippets ranked against the query
- Optional autoprompt rewrite of the query
"""

from utils.logger import get_logger

from .contracts import WebSearchResponse, WebSearchResult

logger = get_logger(__name__)


class ExaSearchClient:
    """
    Thin wrapper over exa_py that converts SDK objects into WebSearchResult.

    Errors from the SDK propagate; the service decides how to report them.
    """

    def __init__(self, api_key: str):
        """
        Initialize Exa client.

        Args:
            api_key: Exa API key
        """
        if not api_key:
            raise ValueError("EXA_API_KEY not found in environment")

        from exa_py import Exa

        self.client = Exa(api_key=api_key)
        logger.info("Exa client initialized")

    def search_and_contents(
        self, query: str, num_results: int = 10, use_autoprompt: bool = True
    ) -> WebSearchResponse:
        """
        Search the web and fetch text plus highlights for every result.

        Args:
            query: Search query
            num_results: Maximum number of results
            use_autoprompt: Let Exa rewrite the query for neural search

        Returns:
            WebSearchResponse without contact info
        """
        logger.info(f"Exa search: '{query}' (num_results={num_results}, autoprompt={use_autoprompt})")

        response = self.client.search_and_contents(
            query,
            num_results=num_results,
            use_autoprompt=use_autoprompt,
            text=True,
            highlights=True,
        )

        results = [
            WebSearchResult(
                id=getattr(result, "id", None) or result.url,
                url=result.url,
                title=getattr(result, "title", None),
                author=getattr(result, "author", None),
                published_date=getattr(result, "published_date", None),
                text=getattr(result, "text", None),
                highlights=getattr(result, "highlights", None),
                highlight_scores=getattr(result, "highlight_scores", None),
            )
            for result in getattr(response, "results", None) or []
        ]

        logger.info(f"Exa returned {len(results)} results")
        return WebSearchResponse(
            results=results,
            autoprompt_string=getattr(response, "autoprompt_string", None),
        )
