from sqlalchemy import Column, String, Text, JSON
from .base import Base


class TodoEntity(Base):
    __tablename__ = "todo"

    id = Column(String(24), primary_key=True)
    text = Column(Text, nullable=False)
    status = Column(String, nullable=False, default="todo", index=True)
    created_at = Column(String, nullable=False)
    ongoing_start_time = Column(String, nullable=True)
    completed_at = Column(String, nullable=True)
    image = Column(Text, nullable=True)
    tags = Column(JSON, nullable=False, default=list)
