"""Export and import of the whole collection as a JSON snapshot.

Import always replaces the collection. The snapshot is validated in full
before anything is cleared; a failure after the clear is reported as
ImportIncomplete, never hidden.
"""

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Tuple, Union

from loguru import logger

from todostore import lifecycle
from todostore.entity.dto import Todo, normalize_tags
from todostore.exceptions import (
    ImportAborted,
    ImportIncomplete,
    TodoStoreError,
    ValidationFailed,
)
from todostore.gateway.base import TodoGateway
from todostore.util import get_utc_iso8601_timestamp, is_native_id

SNAPSHOT_VERSION = "1.0"


@dataclass
class ImportResult:
    success: bool
    message: str
    imported: int = 0


def export_snapshot(gateway: TodoGateway) -> Dict[str, Any]:
    todos = gateway.list_all()
    tags = gateway.list_tags()
    return {
        "todos": [t.to_dict() for t in todos],
        "tags": [t.name for t in tags],
        "exportDate": get_utc_iso8601_timestamp(),
        "version": SNAPSHOT_VERSION,
    }


def dump_snapshot(snapshot: Dict[str, Any]) -> str:
    return json.dumps(snapshot, indent=2, ensure_ascii=False)


def backup_filename(today=None) -> str:
    today = today or datetime.now().date()
    return f"todo-backup-{today.isoformat()}.json"


def _load(payload: Union[str, bytes, Dict[str, Any]]) -> Dict[str, Any]:
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except ValueError as e:
            raise ImportAborted(f"Invalid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise ImportAborted("Invalid data format: expected an object")
    return payload


def validate_snapshot(payload, require_tags: bool = False) -> Tuple[List[Todo], List[str]]:
    """Parse a snapshot into records without touching any store. Raises ImportAborted."""
    data = _load(payload)

    raw_todos = data.get("todos")
    if not isinstance(raw_todos, list):
        raise ImportAborted("Invalid data format: todos array is missing")

    raw_tags = data.get("tags")
    if raw_tags is None:
        if require_tags:
            raise ImportAborted("Invalid data format: tags array is missing")
        raw_tags = []
    elif not isinstance(raw_tags, list):
        raise ImportAborted("Invalid data format: tags must be an array")
    try:
        tags = normalize_tags(raw_tags)
    except ValidationFailed as e:
        raise ImportAborted(f"Invalid data format: {e}") from e

    now = get_utc_iso8601_timestamp()
    todos: List[Todo] = []
    seen_ids = set()
    for index, raw in enumerate(raw_todos):
        try:
            todo = lifecycle.normalize(Todo.from_dict(raw), now=now)
        except ValidationFailed as e:
            raise ImportAborted(f"Invalid todo at index {index}: {e}") from e
        if is_native_id(todo.id):
            key = todo.id.lower()
            if key in seen_ids:
                raise ImportAborted(f"Duplicate todo id {todo.id}")
            seen_ids.add(key)
        todos.append(todo)

    for todo in todos:
        for name in todo.tags:
            if name not in tags:
                tags.append(name)
    return todos, tags


def import_snapshot(gateway: TodoGateway, payload, require_tags: bool = False) -> ImportResult:
    todos, tags = validate_snapshot(payload, require_tags=require_tags)

    written = 0
    try:
        gateway.clear_all()
        gateway.clear_tags()
        for name in tags:
            gateway.add_tag(name)
        written = gateway.insert_many(todos)
    except TodoStoreError as e:
        logger.exception("import stopped after clearing the collection ({} of {} todos written)", written, len(todos))
        raise ImportIncomplete(f"Import incomplete: {e}", written=written, total=len(todos)) from e

    logger.info("imported {} todos and {} tags", written, len(tags))
    return ImportResult(success=True, message=f"Imported {written} todos", imported=written)


def import_data(gateway: TodoGateway, payload, require_tags: bool = False) -> ImportResult:
    """Like import_snapshot, but failures come back as an unsuccessful result."""
    try:
        return import_snapshot(gateway, payload, require_tags=require_tags)
    except TodoStoreError as e:
        logger.warning("import failed: {}", e)
        return ImportResult(success=False, message=f"Import failed: {e}")
