"""POST /search-experts: AI-assisted expert witness search."""

from fastapi import APIRouter, Depends, Response, status

from models.errors import ExpertSearchError, ServiceError
from server.dependencies import RequestContext, get_expert_search_service, get_request_context
from server.schemas.requests import SearchRequest
from server.schemas.responses import ErrorResponseDTO, ExpertSearchResponseDTO
from server.utils import CORS_HEADERS
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Experts"])


@router.options("/search-experts", include_in_schema=False)
async def search_experts_preflight():
    return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)


@router.post(
    "/search-experts",
    response_model=ExpertSearchResponseDTO,
    responses={400: {"model": ErrorResponseDTO}, 500: {"model": ErrorResponseDTO}},
)
async def search_experts(
    request: SearchRequest,
    context: RequestContext = Depends(get_request_context),
    service=Depends(get_expert_search_service),
):
    """
    Search the expert directory.

    A case description, when given, is analyzed by the language model first;
    explicit filters always win over the model's suggestions.
    """
    logger.info(
        "Expert search requested",
        extra={
            "extra_fields": {
                "request_id": context.request_id,
                "authenticated": context.authenticated,
                "has_case_description": bool(request.case_description),
            }
        },
    )

    try:
        outcome = await service.search(request)
    except ServiceError:
        raise
    except Exception as e:
        logger.error(f"Search error: {e}", exc_info=True)
        raise ExpertSearchError(str(e) or "Search failed") from e

    return ExpertSearchResponseDTO.from_outcome(outcome)
