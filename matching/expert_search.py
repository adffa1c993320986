"""Expert search pipeline: case analysis, query construction, directory lookup."""

from dataclasses import dataclass, field

from db.directory import ExpertDirectory
from matching.case_analyzer import CaseAnalyzer
from matching.expert_mapper import to_expert_result
from matching.filters import (
    DEFAULT_PAGE_SIZE,
    DirectoryQuery,
    build_directory_query,
    build_enhanced_query,
)
from models.case_analysis import CaseAnalysis
from models.errors import InvalidSearchRequest
from server.schemas.requests import SearchRequest
from server.schemas.responses import ExpertResult
from utils.logger import get_logger

logger = get_logger(__name__)

MISSING_SEARCH_TEXT = "Search query or case description is required"


@dataclass(frozen=True)
class ExpertSearchOutcome:
    query: str | None
    original_query: str | None
    case_analysis: CaseAnalysis | None
    directory_query: DirectoryQuery
    experts: list[ExpertResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.experts)


class ExpertSearchService:
    """
    Runs one expert search request end to end.

    The case analyzer (when a case description is given) completes before
    the directory query is built, since both the enhanced query and the
    specialty/location fallbacks depend on its output.
    """

    def __init__(
        self,
        analyzer: CaseAnalyzer,
        directory: ExpertDirectory,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.analyzer = analyzer
        self.directory = directory
        self.page_size = page_size

    async def search(self, request: SearchRequest) -> ExpertSearchOutcome:
        """
        Raises:
            InvalidSearchRequest: Both query and case description are blank
            DirectoryQueryError: The directory query failed or timed out
        """
        if not request.has_search_text:
            raise InvalidSearchRequest(MISSING_SEARCH_TEXT)

        analysis = None
        if request.case_description and request.case_description.strip():
            analysis = await self.analyzer.analyze_async(request.case_description)

        enhanced_query = build_enhanced_query(request.query, analysis)
        if analysis is not None:
            logger.info(
                "Query enhanced from case analysis",
                extra={"extra_fields": {"enhanced_query": enhanced_query}},
            )

        directory_query = build_directory_query(
            request, analysis, enhanced_query, page_size=self.page_size
        )
        if request.availability:
            # Only active experts are listed; no scheduling data to filter on
            logger.debug(f"Availability preference '{request.availability}' not applied")

        rows = await self.directory.search_async(directory_query)
        experts = [to_expert_result(row) for row in rows]

        logger.info(
            f"Expert search returned {len(experts)} experts",
            extra={
                "extra_fields": {
                    "filters": directory_query.describe(),
                    "case_analysis_used": analysis is not None,
                }
            },
        )

        return ExpertSearchOutcome(
            query=enhanced_query,
            original_query=request.query,
            case_analysis=analysis,
            directory_query=directory_query,
            experts=experts,
        )
