"""Todo service: the operations the presentation layer calls."""

from typing import Iterable, List, Optional

from loguru import logger

from todostore import lifecycle
from todostore.entity.dto import STATUS_SEQUENCE, Status, Todo, normalize_tags
from todostore.exceptions import ValidationFailed
from todostore.gateway.base import TodoGateway


def list_todos(gateway: TodoGateway, status: Optional[str] = None) -> List[Todo]:
    todos = gateway.list_all()
    if status:
        status = Status.parse(status)
        todos = [t for t in todos if t.status == status]
    return todos


def sort_todos(todos: Iterable[Todo]) -> List[Todo]:
    """Board order: by status sequence, newest first within a status."""
    by_recency = sorted(todos, key=lambda t: t.created_at or "", reverse=True)
    return sorted(by_recency, key=lambda t: STATUS_SEQUENCE.index(t.status))


def get_todo(gateway: TodoGateway, todo_id: str) -> Todo:
    return gateway.get(todo_id)


def _register_tags(gateway: TodoGateway, tags: List[str]) -> None:
    if not tags:
        return
    known = {t.name for t in gateway.list_tags()}
    for name in tags:
        if name not in known:
            gateway.add_tag(name)
            logger.info("registered tag {}", name)


def create_todo(
    gateway: TodoGateway,
    raw_text: str,
    image: Optional[str] = None,
    tag: Optional[str] = None,
    tags: Optional[Iterable[str]] = None,
) -> Todo:
    tag_list = normalize_tags(list(tags or []) + ([tag] if tag else []))
    draft = lifecycle.new_todo(raw_text, image=image, tags=tag_list)
    _register_tags(gateway, draft.tags)
    todo = gateway.upsert(draft)
    logger.info("created todo {} ({})", todo.id, todo.status.value)
    return todo


def change_status(gateway: TodoGateway, todo_id: str, new_status) -> Todo:
    current = gateway.get(todo_id)
    todo = gateway.upsert(lifecycle.transition(current, new_status))
    logger.info("todo {} status {} -> {}", todo.id, current.status.value, todo.status.value)
    return todo


def cycle_todo(gateway: TodoGateway, todo_id: str) -> Todo:
    current = gateway.get(todo_id)
    return change_status(gateway, todo_id, lifecycle.cycle_status(current.status))


def update_text(gateway: TodoGateway, todo_id: str, text: str) -> Todo:
    text = (text or "").strip()
    if not text:
        raise ValidationFailed("Todo text is required")
    current = gateway.get(todo_id)
    todo = gateway.upsert(current.copy(text=text))
    logger.info("todo {} text updated", todo.id)
    return todo


def set_tags(gateway: TodoGateway, todo_id: str, tags: Iterable[str]) -> Todo:
    tag_list = normalize_tags(tags)
    current = gateway.get(todo_id)
    _register_tags(gateway, tag_list)
    todo = gateway.upsert(current.copy(tags=tag_list))
    logger.info("todo {} tags set to {}", todo.id, tag_list)
    return todo


def delete_todo(gateway: TodoGateway, todo_id: str) -> None:
    gateway.remove(todo_id)
    logger.info("deleted todo {}", todo_id)
