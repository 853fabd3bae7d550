from typing import Any, Dict, List, Optional

from fastapi import APIRouter
from pydantic import BaseModel

from todostore import lifecycle
from todostore.entity.dto import Todo
from todostore.exceptions import NotFound
from todostore.gateway.local import LocalGateway
from todostore.service import transfer
from todostore.util import is_native_id

router = APIRouter(prefix="/todos")


def _gateway() -> LocalGateway:
    return LocalGateway()


class TodoRequest(BaseModel):
    text: str
    status: Optional[str] = None
    createdAt: Optional[str] = None
    ongoingStartTime: Optional[str] = None
    completedAt: Optional[str] = None
    image: Optional[str] = None
    tags: Optional[List[str]] = None
    tag: Optional[str] = None


class TodoListRequest(BaseModel):
    todos: List[Dict[str, Any]]


def _to_todo(req: TodoRequest, todo_id: Optional[str] = None) -> Todo:
    todo = Todo.from_dict(req.model_dump(exclude_none=True))
    todo.id = todo_id
    return lifecycle.normalize(todo)


@router.get("")
async def list_todos():
    return [t.to_dict() for t in _gateway().list_all()]


@router.post("", status_code=201)
async def create_todo(req: TodoRequest):
    return _gateway().upsert(_to_todo(req)).to_dict()


@router.delete("")
async def clear_todos():
    _gateway().clear_all()
    return {"success": True}


@router.post("/bulk", status_code=201)
async def insert_todos(req: TodoListRequest):
    todos = [lifecycle.normalize(Todo.from_dict(raw)) for raw in req.todos]
    inserted = _gateway().insert_many(todos)
    return {"success": True, "inserted": inserted}


@router.post("/import")
async def import_todos(payload: Dict[str, Any]):
    result = transfer.import_snapshot(_gateway(), payload)
    return {"success": result.success, "message": result.message}


@router.get("/{todo_id}")
async def get_todo(todo_id: str):
    if not is_native_id(todo_id):
        raise NotFound("Todo not found")
    return _gateway().get(todo_id).to_dict()


@router.put("/{todo_id}")
async def replace_todo(todo_id: str, req: TodoRequest):
    if not is_native_id(todo_id):
        raise NotFound("Todo not found")
    return _gateway().upsert(_to_todo(req, todo_id)).to_dict()


@router.delete("/{todo_id}")
async def delete_todo(todo_id: str):
    if not is_native_id(todo_id):
        raise NotFound("Todo not found")
    _gateway().remove(todo_id)
    return {"success": True}
