from fastapi_users.db import SQLAlchemyBaseUserTableUUID
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from database import Base


class User(SQLAlchemyBaseUserTableUUID, Base):
    __tablename__ = 'users'

    first_name: Mapped[str] = mapped_column(String(length=100), default="", nullable=False)
    last_name: Mapped[str] = mapped_column(String(length=100), default="", nullable=False)
