"""Function-based tag registry repository using SQLAlchemy sessions."""

from typing import Iterable, List, Optional
from todostore.entity.tag import TagEntity
from todostore.entity.todo import TodoEntity
from todostore.entity.dto import Tag
from todostore.database.base import get_db
from todostore.util import get_utc_iso8601_timestamp


def _entity_to_dto(entity: TagEntity) -> Tag:
    return Tag(name=entity.name, created_at=entity.created_at)


def list_tags() -> List[Tag]:
    with get_db() as session:
        rows = session.query(TagEntity).order_by(TagEntity.name.asc()).all()
        return [_entity_to_dto(r) for r in rows]


def get_tag(name: str) -> Optional[Tag]:
    with get_db() as session:
        row = session.get(TagEntity, name)
        return _entity_to_dto(row) if row else None


def add_tag(name: str) -> Tag:
    """Insert the tag unless it already exists; returns the stored tag either way."""
    with get_db() as session:
        entity = session.get(TagEntity, name)
        if not entity:
            entity = TagEntity(name=name, created_at=get_utc_iso8601_timestamp())
            session.add(entity)
            session.flush()
        return _entity_to_dto(entity)


def add_tags(names: Iterable[str]) -> int:
    with get_db() as session:
        count = 0
        for name in names:
            if session.get(TagEntity, name):
                continue
            session.add(TagEntity(name=name, created_at=get_utc_iso8601_timestamp()))
            session.flush()
            count += 1
        return count


def delete_tag_cascade(name: str) -> Optional[int]:
    """Remove the tag and strip it from every todo in the same transaction.

    Returns the number of todos that referenced the tag, or None when the
    tag is not registered.
    """
    with get_db() as session:
        entity = session.get(TagEntity, name)
        if not entity:
            return None
        stripped = 0
        for todo in session.query(TodoEntity).all():
            if todo.tags and name in todo.tags:
                todo.tags = [t for t in todo.tags if t != name]
                stripped += 1
        session.delete(entity)
        session.flush()
        return stripped


def clear_tags() -> int:
    with get_db() as session:
        count = session.query(TagEntity).delete()
        session.flush()
        return count
