"""REST backend: the document-store API served by `todoapi`."""

from typing import Any, List, Optional, Sequence
from urllib.parse import quote

import httpx
from loguru import logger

from todostore.entity.dto import Tag, Todo
from todostore.exceptions import BackendUnavailable, NotFound, ValidationFailed
from todostore.gateway.base import TodoGateway, validate_todo
from todostore.util import is_native_id

DEFAULT_TIMEOUT = 30


def _todo_payload(todo: Todo) -> dict:
    payload = todo.to_dict()
    payload.pop("id", None)
    return payload


class RemoteGateway(TodoGateway):
    name = "remote"

    def __init__(self, api_url: str = "", timeout: float = DEFAULT_TIMEOUT, client: Optional[httpx.Client] = None):
        if client is None:
            if not api_url:
                raise ValidationFailed("RemoteGateway needs an api url")
            client = httpx.Client(base_url=api_url.rstrip("/"), timeout=timeout)
            self._owns_client = True
        else:
            self._owns_client = False
        self.client = client

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            resp = self.client.request(method, path, **kwargs)
        except httpx.TransportError as e:
            logger.warning("{} {} failed: {}", method, path, e)
            raise BackendUnavailable(f"Cannot reach todo API: {e}") from e

        if resp.is_success:
            return resp
        message = _error_message(resp)
        if resp.status_code == 404:
            raise NotFound(message)
        if resp.status_code in (400, 409, 422):
            raise ValidationFailed(message)
        logger.warning("{} {} returned {}: {}", method, path, resp.status_code, message)
        raise BackendUnavailable(f"Todo API error {resp.status_code}: {message}")

    def _json(self, method: str, path: str, expect: type, **kwargs) -> Any:
        """Request and decode the body; anything but a JSON `expect` is a backend failure."""
        resp = self._request(method, path, **kwargs)
        try:
            data = resp.json()
        except ValueError as e:
            logger.warning("{} {} returned a non-JSON body", method, path)
            raise BackendUnavailable(f"Todo API sent an unreadable response to {method} {path}") from e
        if not isinstance(data, expect):
            raise BackendUnavailable(f"Todo API sent an unexpected response to {method} {path}")
        return data

    def list_all(self) -> List[Todo]:
        return [Todo.from_dict(t) for t in self._json("GET", "/api/todos", list)]

    def get(self, todo_id: str) -> Todo:
        if not is_native_id(todo_id):
            raise NotFound(f"Todo '{todo_id}' not found")
        return Todo.from_dict(self._json("GET", f"/api/todos/{todo_id}", dict))

    def upsert(self, todo: Todo) -> Todo:
        validate_todo(todo)
        if is_native_id(todo.id):
            data = self._json("PUT", f"/api/todos/{todo.id}", dict, json=_todo_payload(todo))
        else:
            data = self._json("POST", "/api/todos", dict, json=_todo_payload(todo))
        return Todo.from_dict(data)

    def remove(self, todo_id: str) -> None:
        if not is_native_id(todo_id):
            raise NotFound(f"Todo '{todo_id}' not found")
        self._request("DELETE", f"/api/todos/{todo_id}")

    def clear_all(self) -> None:
        self._request("DELETE", "/api/todos")

    def insert_many(self, todos: Sequence[Todo]) -> int:
        for todo in todos:
            validate_todo(todo)
        data = self._json("POST", "/api/todos/bulk", dict, json={"todos": [t.to_dict() for t in todos]})
        return _count(data, "inserted")

    def list_tags(self) -> List[Tag]:
        return [_tag(t) for t in self._json("GET", "/api/tags", list)]

    def add_tag(self, name: str) -> Tag:
        return _tag(self._json("POST", "/api/tags", dict, json={"name": name}))

    def remove_tag(self, name: str) -> int:
        data = self._json("DELETE", f"/api/tags/{quote(name, safe='')}", dict)
        return _count(data, "stripped")

    def clear_tags(self) -> None:
        self._request("DELETE", "/api/tags")

    def tag_usage(self, name: str) -> int:
        data = self._json("GET", f"/api/tags/{quote(name, safe='')}/usage", dict)
        return _count(data, "count")

    def close(self) -> None:
        if self._owns_client:
            self.client.close()


def _tag(data) -> Tag:
    if not isinstance(data, dict) or not isinstance(data.get("name"), str):
        raise BackendUnavailable("Todo API sent a malformed tag")
    return Tag(name=data["name"], created_at=data.get("createdAt"))


def _count(data: dict, key: str) -> int:
    value = data.get(key, 0)
    if not isinstance(value, int):
        raise BackendUnavailable(f"Todo API sent a malformed '{key}' count")
    return value


def _error_message(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text or "Request failed"
    if isinstance(data, dict):
        return str(data.get("message") or data.get("detail") or "Request failed")
    return "Request failed"
