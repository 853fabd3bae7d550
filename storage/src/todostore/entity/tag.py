from sqlalchemy import Column, String
from .base import Base


class TagEntity(Base):
    __tablename__ = "tag"

    name = Column(String, primary_key=True)
    created_at = Column(String, nullable=False)
