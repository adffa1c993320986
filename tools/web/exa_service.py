"""Web search proxy: Exa search with optional contact extraction."""

import asyncio

from models.errors import InvalidSearchRequest, UpstreamServiceError
from utils.logger import get_logger

from .contact_extractor import build_contact_text, extract_contact_info
from .contracts import WebSearchResponse
from .exa_client import ExaSearchClient

logger = get_logger(__name__)

MISSING_QUERY = "Query is required"


class WebSearchService:
    """
    Forwards queries to Exa and optionally attaches contact info to results.

    Unlike case analysis there is no degraded mode: a provider failure or
    timeout is raised as UpstreamServiceError, never returned as an empty
    result list.
    """

    def __init__(self, client: ExaSearchClient, timeout_s: float = 30.0):
        """
        Args:
            client: Exa client (or a test double with search_and_contents)
            timeout_s: Upper bound for one provider call
        """
        self.client = client
        self.timeout_s = timeout_s

    async def search(
        self,
        query: str | None,
        num_results: int = 10,
        use_autoprompt: bool = True,
        extract_contacts: bool = False,
    ) -> WebSearchResponse:
        """
        Raises:
            InvalidSearchRequest: The query is missing or blank
            UpstreamServiceError: Exa failed or timed out
        """
        if not query or not query.strip():
            raise InvalidSearchRequest(MISSING_QUERY)

        try:
            response = await asyncio.wait_for(
                asyncio.to_thread(
                    self.client.search_and_contents,
                    query,
                    num_results=num_results,
                    use_autoprompt=use_autoprompt,
                ),
                timeout=self.timeout_s,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Exa search timed out after {self.timeout_s}s")
            raise UpstreamServiceError("Web search timed out") from e
        except Exception as e:
            logger.error(f"Error in exa-search: {e}", exc_info=True)
            raise UpstreamServiceError(str(e) or "An unknown error occurred") from e

        if extract_contacts:
            for result in response.results:
                result.contact_info = extract_contact_info(
                    build_contact_text(result.text, result.highlights)
                )

        logger.info(
            "Exa search completed",
            extra={
                "extra_fields": {
                    "query": query,
                    "num_results": len(response.results),
                    "autoprompt_string": response.autoprompt_string,
                    "contacts_extracted": extract_contacts,
                }
            },
        )
        return response
