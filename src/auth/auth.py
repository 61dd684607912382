from typing import Optional, Union
import logging
import re
import uuid

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordRequestForm
from fastapi_users import BaseUserManager, InvalidPasswordException, UUIDIDMixin
from fastapi_users.db import SQLAlchemyUserDatabase
from sqlalchemy.ext.asyncio import AsyncSession

from auth.models import User
from auth.schemas import UserCreate
from database import get_async_session

logger = logging.getLogger('auth_manager')

MIN_PASSWORD_LENGTH = 8


async def get_user_db(session: AsyncSession = Depends(get_async_session)):
    yield SQLAlchemyUserDatabase(session, User)


class UserManager(UUIDIDMixin, BaseUserManager[User, uuid.UUID]):
    async def validate_password(self, password: str, user: Union[UserCreate, User]) -> None:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise InvalidPasswordException(
                reason=f"Password should be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if not re.search(r"[A-Za-z]", password) or not re.search(r"\d", password):
            raise InvalidPasswordException(reason="Password should contain letters and digits")
        if user.email.lower() in password.lower():
            raise InvalidPasswordException(reason="Password should not contain e-mail")

    async def on_after_register(self, user: User, request: Optional[Request] = None):
        logger.info(f"User {user.id} has registered.")

    async def sign_in(self, email: str, password: str) -> Optional[User]:
        """Return the user when `password` matches the stored hash, else None.

        The lookup is by e-mail only; the password is checked against the
        stored hash by the password helper.
        """
        credentials = OAuth2PasswordRequestForm(username=email, password=password)
        user = await self.authenticate(credentials)
        if user is None or not user.is_active:
            logger.debug(f"Failed sign in attempt for {email}")
            return None
        return user


async def get_user_manager(user_db=Depends(get_user_db)):
    yield UserManager(user_db)
