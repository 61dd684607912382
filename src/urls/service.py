from typing import Optional
from logging import getLogger
import uuid

from fastapi import Depends
from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from database import get_async_session
from api_responses.result import Err, ErrorKind, Ok, Result
from urls.models import ShortUrl
from urls.utils import build_short_url, generate_short_code, is_absolute_url

logger = getLogger('url_service')


class ShortUrlService:
    """Creates and resolves short URL mappings.

    Every method returns an `Ok` or an `Err`; database failures are reported
    as `Internal` errors rather than raised.
    """

    def __init__(self, session: AsyncSession, code_length: int = 6, max_attempts: int = 5):
        self.session = session
        self.code_length = code_length
        self.max_attempts = max_attempts

    async def create(self, original_url: str, base_url: str,
                     owner_id: Optional[uuid.UUID] = None) -> Result:
        if not is_absolute_url(original_url):
            return Err(ErrorKind.INVALID_URL, "Invalid URL", {"originalUrl": original_url})

        try:
            for attempt in range(1, self.max_attempts + 1):
                short_code = generate_short_code(self.code_length)
                statement = insert(ShortUrl).values(
                    original_url=original_url,
                    short_code=short_code,
                    owner_id=owner_id,
                )
                try:
                    await self.session.execute(statement)
                    await self.session.commit()
                except IntegrityError:
                    await self.session.rollback()
                    logger.debug(f"Collision on {short_code} (attempt {attempt}), retrying with new short code.")
                    continue
                return Ok({"shortUrl": build_short_url(base_url, short_code)})
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.warning(e)
            return Err(ErrorKind.INTERNAL, "Could not create short URL")

        logger.warning(f"No free short code after {self.max_attempts} attempts")
        return Err(ErrorKind.INTERNAL, "Could not allocate a unique short code")

    async def get(self, short_code: str) -> Result:
        try:
            query = select(ShortUrl.original_url).where(ShortUrl.short_code == short_code)
            original_url = (await self.session.execute(query)).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.warning(e)
            return Err(ErrorKind.INTERNAL, "Could not resolve short URL")

        if original_url is None:
            return Err(ErrorKind.NOT_FOUND, "Short URL not found")
        return Ok(original_url)

    async def list_for_owner(self, owner_id: uuid.UUID) -> Result:
        try:
            query = (
                select(ShortUrl)
                .where(ShortUrl.owner_id == owner_id)
                .order_by(ShortUrl.created_at.desc(), ShortUrl.id.desc())
            )
            links = (await self.session.execute(query)).scalars().all()
        except SQLAlchemyError as e:
            logger.warning(e)
            return Err(ErrorKind.INTERNAL, "Could not list short URLs")

        return Ok([{
            "shortCode": l.short_code,
            "originalUrl": l.original_url,
            "createdAt": l.created_at,
        } for l in links])


async def get_url_service(session: AsyncSession = Depends(get_async_session)) -> ShortUrlService:
    return ShortUrlService(
        session,
        code_length=settings.short_code_length,
        max_attempts=settings.short_code_max_attempts,
    )
