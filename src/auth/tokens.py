from datetime import datetime, timezone
from typing import Any, Dict, Optional

import jwt
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from config import settings

ACCESS_TOKEN_TYPE = "access"


class ExpiredToken(Exception):
    pass


class MalformedToken(Exception):
    pass


class Identity(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    email: str
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")


class TokenClaims(Identity):
    token_type: str = Field(alias="tokenType")
    issued_at: int = Field(alias="iat")
    expires_at: int = Field(alias="exp")

    def identity(self) -> Identity:
        return Identity(user_id=self.user_id, email=self.email,
                        first_name=self.first_name, last_name=self.last_name)


def _now(now: Optional[datetime]) -> float:
    return (now or datetime.now(timezone.utc)).timestamp()


class TokenCodec:
    """Signs and verifies access tokens carrying an `Identity`.

    `now` is accepted by both operations so callers (and tests) control the
    clock the expiry is measured against.
    """

    def __init__(self, secret: str, lifetime_seconds: int, algorithm: str = "HS256"):
        self.secret = secret
        self.lifetime_seconds = lifetime_seconds
        self.algorithm = algorithm

    def mint(self, identity: Identity, now: Optional[datetime] = None) -> str:
        issued_at = int(_now(now))
        claims = TokenClaims(
            **identity.model_dump(),
            token_type=ACCESS_TOKEN_TYPE,
            issued_at=issued_at,
            expires_at=issued_at + self.lifetime_seconds,
        )
        payload: Dict[str, Any] = claims.model_dump(by_alias=True)
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str, now: Optional[datetime] = None) -> TokenClaims:
        try:
            # only the caller's clock decides expiry; iat is never compared to wall time
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False, "verify_iat": False, "require": ["exp", "iat"]},
            )
            claims = TokenClaims.model_validate(payload)
        except (jwt.PyJWTError, ValidationError) as e:
            raise MalformedToken(str(e)) from e

        if claims.token_type != ACCESS_TOKEN_TYPE:
            raise MalformedToken(f"Unexpected token type {claims.token_type!r}")
        if _now(now) > claims.expires_at:
            raise ExpiredToken(f"Token expired at {claims.expires_at}")
        return claims


def get_token_codec() -> TokenCodec:
    return TokenCodec(
        secret=settings.secret,
        lifetime_seconds=settings.access_token_lifetime_seconds,
        algorithm=settings.token_algorithm,
    )
