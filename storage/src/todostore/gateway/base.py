"""Storage contract shared by the embedded and the remote backend."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from todostore.entity.dto import Status, Tag, Todo
from todostore.exceptions import ValidationFailed


def validate_todo(todo: Todo) -> None:
    if not isinstance(todo.text, str) or not todo.text.strip():
        raise ValidationFailed("Todo text is required")
    Status.parse(todo.status)


class TodoGateway(ABC):
    """Uniform CRUD over one backend.

    `upsert` decides create vs update from the id: a backend-native id
    (24 hex chars) replaces that record, anything else creates a new one.
    Callers must adopt the id of the returned record.
    """

    name = "base"

    @abstractmethod
    def list_all(self) -> List[Todo]:
        ...

    @abstractmethod
    def get(self, todo_id: str) -> Todo:
        ...

    @abstractmethod
    def upsert(self, todo: Todo) -> Todo:
        ...

    @abstractmethod
    def remove(self, todo_id: str) -> None:
        ...

    @abstractmethod
    def clear_all(self) -> None:
        ...

    @abstractmethod
    def insert_many(self, todos: Sequence[Todo]) -> int:
        """Insert records keeping their native ids; other ids are replaced by new native ids."""

    @abstractmethod
    def list_tags(self) -> List[Tag]:
        ...

    @abstractmethod
    def add_tag(self, name: str) -> Tag:
        ...

    @abstractmethod
    def remove_tag(self, name: str) -> int:
        """Drop a tag and strip it from every todo atomically. Returns how many todos were touched."""

    @abstractmethod
    def clear_tags(self) -> None:
        ...

    @abstractmethod
    def tag_usage(self, name: str) -> int:
        ...

    def get_tag(self, name: str) -> Optional[Tag]:
        for tag in self.list_tags():
            if tag.name == name:
                return tag
        return None

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
