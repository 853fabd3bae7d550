"""Embedded backend: a local SQLAlchemy database (SQLite by default)."""

from typing import List, Optional, Sequence

from loguru import logger

from todostore.database.base import close_db, init_db, is_initialized
from todostore.entity.dto import Tag, Todo
from todostore.exceptions import NotFound, ValidationFailed
from todostore.gateway.base import TodoGateway, validate_todo
from todostore.repository import tag as tag_repo
from todostore.repository import todo as todo_repo
from todostore.util import generate_id, get_utc_iso8601_timestamp, is_native_id


def _canonical(todo_id):
    return todo_id.lower() if is_native_id(todo_id) else todo_id


class LocalGateway(TodoGateway):
    name = "local"

    def __init__(self, database_url: Optional[str] = None):
        if database_url:
            init_db(database_url)
        elif not is_initialized():
            raise ValidationFailed("LocalGateway needs a database url")
        self._owns_db = bool(database_url)

    def list_all(self) -> List[Todo]:
        return todo_repo.list_todos()

    def get(self, todo_id: str) -> Todo:
        todo = todo_repo.get_todo(_canonical(todo_id))
        if not todo:
            raise NotFound(f"Todo '{todo_id}' not found")
        return todo

    def upsert(self, todo: Todo) -> Todo:
        validate_todo(todo)
        if is_native_id(todo.id):
            saved = todo_repo.replace_todo(todo.copy(id=todo.id.lower()))
            if not saved:
                raise NotFound(f"Todo '{todo.id}' not found")
            logger.debug("replaced todo {}", saved.id)
            return saved
        record = todo.copy(id=generate_id(), created_at=todo.created_at or get_utc_iso8601_timestamp())
        saved = todo_repo.insert_todo(record)
        logger.debug("inserted todo {} (client id {})", saved.id, todo.id)
        return saved

    def remove(self, todo_id: str) -> None:
        if not todo_repo.delete_todo(_canonical(todo_id)):
            raise NotFound(f"Todo '{todo_id}' not found")

    def clear_all(self) -> None:
        count = todo_repo.clear_todos()
        logger.info("cleared {} todos", count)

    def insert_many(self, todos: Sequence[Todo]) -> int:
        records = []
        for todo in todos:
            validate_todo(todo)
            todo_id = todo.id.lower() if is_native_id(todo.id) else generate_id()
            records.append(todo.copy(id=todo_id))
        return todo_repo.insert_todos(records)

    def list_tags(self) -> List[Tag]:
        return tag_repo.list_tags()

    def get_tag(self, name: str) -> Optional[Tag]:
        return tag_repo.get_tag(name)

    def add_tag(self, name: str) -> Tag:
        return tag_repo.add_tag(name)

    def remove_tag(self, name: str) -> int:
        stripped = tag_repo.delete_tag_cascade(name)
        if stripped is None:
            raise NotFound(f"Tag '{name}' not found")
        return stripped

    def clear_tags(self) -> None:
        tag_repo.clear_tags()

    def tag_usage(self, name: str) -> int:
        return todo_repo.count_tag_usage(name)

    def close(self) -> None:
        if self._owns_db:
            close_db()
