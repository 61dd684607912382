from fastapi import APIRouter, Depends, Path, Request, status

from typing_extensions import Annotated
from typing import Optional
from logging import getLogger
import uuid

from auth.middleware import current_identity, current_identity_optional
from auth.tokens import TokenClaims
from config import settings
from api_responses import respond
from api_responses.errors import classify
from urls.schemas import ShortenRequest
from urls.service import ShortUrlService, get_url_service

logger = getLogger('urls_router')

router = APIRouter(
    prefix="/urls",
    tags=["Urls"],
)


def resolve_base_url(request: Request) -> str:
    if settings.short_url_base:
        return settings.short_url_base
    return request.headers.get("origin") or str(request.base_url)


@router.post("/short")
async def shorten_url(body: ShortenRequest,
                      request: Request,
                      service: Annotated[ShortUrlService, Depends(get_url_service)],
                      identity: Annotated[Optional[TokenClaims], Depends(current_identity_optional)]):
    """Creates a short URL. A token is optional; when present the link is owned by its user."""
    try:
        owner_id = uuid.UUID(identity.user_id) if identity is not None else None
        result = await service.create(body.original_url, resolve_base_url(request), owner_id)
    except Exception as e:
        logger.warning(e)
        result = classify(e)
    return respond(result, status.HTTP_201_CREATED)


@router.get("/{url_id}", dependencies=[Depends(current_identity)])
async def get_original_url(url_id: Annotated[str, Path(min_length=1, max_length=16)],
                           service: Annotated[ShortUrlService, Depends(get_url_service)]):
    """Returns the original URL behind a short code."""
    try:
        result = (await service.get(url_id)).map(lambda url: {"originalUrl": url})
    except Exception as e:
        logger.warning(e)
        result = classify(e)
    return respond(result)
