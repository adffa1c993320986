"""POST /exa-search: web search proxy with optional contact extraction."""

from fastapi import APIRouter, Depends, Response, status

from models.errors import InvalidSearchRequest, ServiceError, UpstreamServiceError
from server.dependencies import get_web_search_service_factory
from server.schemas.requests import WebSearchRequest
from server.schemas.responses import ErrorResponseDTO, WebSearchResponseDTO
from server.utils import CORS_HEADERS
from tools.web.exa_service import MISSING_QUERY
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Web Search"])


@router.options("/exa-search", include_in_schema=False)
async def exa_search_preflight():
    return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)


@router.post(
    "/exa-search",
    response_model=WebSearchResponseDTO,
    # Absent keys are meaningful: no contactInfo means extraction was not requested
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponseDTO}, 500: {"model": ErrorResponseDTO}},
)
async def exa_search(
    request: WebSearchRequest,
    service_factory=Depends(get_web_search_service_factory),
):
    if not request.query or not request.query.strip():
        raise InvalidSearchRequest(MISSING_QUERY)

    service = service_factory()

    try:
        response = await service.search(
            request.query,
            num_results=request.num_results,
            use_autoprompt=request.use_autoprompt,
            extract_contacts=request.extract_contacts,
        )
    except ServiceError:
        raise
    except Exception as e:
        logger.error(f"Error in exa-search: {e}", exc_info=True)
        raise UpstreamServiceError(str(e) or "An unknown error occurred") from e

    return WebSearchResponseDTO.from_web_search_response(response)
