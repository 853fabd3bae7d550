"""Function-based todo repository using SQLAlchemy sessions."""

from typing import Iterable, List, Optional
from todostore.entity.todo import TodoEntity
from todostore.entity.dto import Status, Todo
from todostore.database.base import get_db


def _entity_to_dto(entity: TodoEntity) -> Todo:
    return Todo(
        id=entity.id,
        text=entity.text,
        status=Status(entity.status),
        created_at=entity.created_at,
        ongoing_start_time=entity.ongoing_start_time,
        completed_at=entity.completed_at,
        image=entity.image,
        tags=list(entity.tags or []),
    )


def _dto_to_entity_fields(todo: Todo) -> dict:
    return dict(
        text=todo.text,
        status=Status.parse(todo.status).value,
        created_at=todo.created_at,
        ongoing_start_time=todo.ongoing_start_time,
        completed_at=todo.completed_at,
        image=todo.image,
        tags=list(todo.tags),
    )


def list_todos() -> List[Todo]:
    with get_db() as session:
        query = session.query(TodoEntity).order_by(TodoEntity.created_at.desc(), TodoEntity.id.desc())
        return [_entity_to_dto(row) for row in query.all()]


def get_todo(todo_id: str) -> Optional[Todo]:
    with get_db() as session:
        row = session.get(TodoEntity, todo_id)
        return _entity_to_dto(row) if row else None


def insert_todo(todo: Todo) -> Todo:
    with get_db() as session:
        entity = TodoEntity(id=todo.id, **_dto_to_entity_fields(todo))
        session.add(entity)
        session.flush()
        return _entity_to_dto(entity)


def insert_todos(todos: Iterable[Todo]) -> int:
    with get_db() as session:
        count = 0
        for todo in todos:
            session.add(TodoEntity(id=todo.id, **_dto_to_entity_fields(todo)))
            count += 1
        session.flush()
        return count


def replace_todo(todo: Todo) -> Optional[Todo]:
    """Full-document replace by id. Returns None when the id does not exist.

    created_at is kept from the stored record.
    """
    with get_db() as session:
        entity = session.get(TodoEntity, todo.id)
        if not entity:
            return None
        fields = _dto_to_entity_fields(todo)
        fields.pop("created_at")
        for k, v in fields.items():
            setattr(entity, k, v)
        session.flush()
        return _entity_to_dto(entity)


def delete_todo(todo_id: str) -> bool:
    with get_db() as session:
        count = session.query(TodoEntity).filter_by(id=todo_id).delete()
        session.flush()
        return count > 0


def clear_todos() -> int:
    with get_db() as session:
        count = session.query(TodoEntity).delete()
        session.flush()
        return count


def count_tag_usage(name: str) -> int:
    # tags is a JSON list, filtered in Python to stay portable across backends
    with get_db() as session:
        rows = session.query(TodoEntity.tags).all()
        return sum(1 for (tags,) in rows if tags and name in tags)
