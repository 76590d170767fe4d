"""
JSON API Endpoints

Thin endpoints for programmatic consumers. They only:
- Parse the request
- Apply rate limits
- Delegate to LinkService
- Map service exceptions onto HTTP status codes

Storage failures are logged by the service layer and reported to clients
with a generic message.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from shortener.api.dependencies import get_link_service, short_url_for
from shortener.api.schemas import LinkResponse, ShortenRequest, ShortenResponse
from shortener.core.exceptions import NotFoundError, StorageError, ValidationError
from shortener.core.rate_limit import RATE_LIMITS, limiter
from shortener.services.link_service import LinkService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

STORAGE_FAILURE_DETAIL = "Something went wrong on our side. Please try again later."


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a short link",
    description="Takes a long URL plus optional preview metadata and returns a short link"
)
@limiter.limit(RATE_LIMITS["shorten"])
async def create_short_link(
    request: Request,  # Required for rate limiting (slowapi expects parameter named 'request')
    body: ShortenRequest,
    service: LinkService = Depends(get_link_service),
) -> ShortenResponse:
    try:
        link = await service.create(
            body.url,
            title=body.title,
            description=body.description,
            image=body.image,
            quote=body.quote,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.reason)
    except StorageError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=STORAGE_FAILURE_DETAIL
        )

    return ShortenResponse(
        code=link.code,
        short_url=short_url_for(request, link.code),
        url=link.url,
    )


@router.get(
    "/link/{code}",
    response_model=LinkResponse,
    summary="Get link metadata",
    description="Returns the stored link for a short code"
)
@limiter.limit(RATE_LIMITS["metadata"])
async def get_link_metadata(
    code: str,
    request: Request,  # Required for rate limiting
    service: LinkService = Depends(get_link_service),
) -> LinkResponse:
    """
    Raises:
        HTTPException 404: If the code is unknown
        HTTPException 500: If the lookup fails
        HTTPException 429: If rate limit exceeded
    """
    try:
        metadata = await service.get_metadata(code)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Short code '{code}' not found"
        )
    except StorageError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=STORAGE_FAILURE_DETAIL
        )

    return LinkResponse(**metadata, short_url=short_url_for(request, code))
