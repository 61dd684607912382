from fastapi import APIRouter, Depends

from typing_extensions import Annotated
from logging import getLogger
import uuid

from auth.middleware import current_identity
from auth.tokens import TokenClaims
from api_responses import Ok, respond
from api_responses.errors import classify
from urls.service import ShortUrlService, get_url_service

logger = getLogger('account_router')

router = APIRouter(
    prefix="/users/me",
    tags=["Account"],
)


@router.get("")
async def show_me(identity: Annotated[TokenClaims, Depends(current_identity)]):
    return respond(Ok(identity.identity().model_dump(by_alias=True)))


@router.get("/urls")
async def show_my_urls(service: Annotated[ShortUrlService, Depends(get_url_service)],
                       identity: Annotated[TokenClaims, Depends(current_identity)]):
    try:
        result = (await service.list_for_owner(uuid.UUID(identity.user_id))).map(
            lambda links: {"urls": links, "total": len(links)}
        )
    except Exception as e:
        logger.warning(e.args)
        result = classify(e)
    return respond(result)
