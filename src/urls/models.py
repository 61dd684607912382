from sqlalchemy import Column, Integer, DateTime, String, Text, Uuid
import sqlalchemy

from database import Base


class ShortUrl(Base):
    __tablename__ = 'short_urls'
    id = Column(Integer, primary_key=True)
    original_url = Column(Text, nullable=False, index=True)
    short_code = Column(String(16), nullable=False, unique=True, index=True)
    owner_id = Column(Uuid, nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=sqlalchemy.func.now(), nullable=False)
