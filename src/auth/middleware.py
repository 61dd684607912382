from typing import Optional
from logging import getLogger

from fastapi import Depends, Request

from auth.tokens import ExpiredToken, MalformedToken, TokenClaims, TokenCodec, get_token_codec
from api_responses.errors import expired_token, malformed_token, unauthenticated
from api_responses.result import AppError

logger = getLogger('auth_middleware')

BEARER_PREFIX = "Bearer "


class Authenticator:
    """Route dependency resolving the caller's identity from the `Authorization` header.

    Each route declares whether it needs a token by depending on either
    `current_identity` or `current_identity_optional`. A missing header is
    only accepted on the latter; a header that is present is always checked.
    On success the claims are stored at `request.state.identity`.
    """

    def __init__(self, requires_auth: bool = True):
        self.requires_auth = requires_auth

    async def __call__(self, request: Request,
                       codec: TokenCodec = Depends(get_token_codec)) -> Optional[TokenClaims]:
        request.state.identity = None
        header = request.headers.get("Authorization")

        if not header:
            if self.requires_auth:
                logger.debug(f"Missing Authorization header on {request.url.path}")
                raise AppError(unauthenticated())
            return None

        if not header.startswith(BEARER_PREFIX) or not header[len(BEARER_PREFIX):].strip():
            logger.debug(f"Authorization header without bearer token on {request.url.path}")
            raise AppError(malformed_token())

        token = header[len(BEARER_PREFIX):].strip()
        try:
            claims = codec.verify(token)
        except ExpiredToken:
            raise AppError(expired_token())
        except MalformedToken as e:
            logger.debug(f"Rejected token: {e}")
            raise AppError(malformed_token())

        request.state.identity = claims
        return claims


current_identity = Authenticator(requires_auth=True)
current_identity_optional = Authenticator(requires_auth=False)
