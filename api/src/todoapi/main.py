import json
import os
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from todostore.database.base import close_db, init_db, is_initialized
from todostore.exceptions import (
    BackendUnavailable,
    NotFound,
    TodoStoreError,
    ValidationFailed,
)


class UnicodeJSONResponse(JSONResponse):
    def render(self, content: Any) -> bytes:
        return json.dumps(content, ensure_ascii=False).encode("utf-8")

from todoapi.controller.todo import router as todo_router
from todoapi.controller.tag import router as tag_router


def _database_url() -> str:
    url = os.getenv("TODO_DATABASE_URL")
    if url:
        return url
    home = os.path.expanduser(os.getenv("TODO_HOME", "~/.todo-sync"))
    os.makedirs(home, exist_ok=True)
    return f"sqlite:///{os.path.join(home, 'server.db')}"


@asynccontextmanager
async def lifespan(_: FastAPI):
    owns_db = not is_initialized()
    if owns_db:
        init_db(_database_url())
    yield
    if owns_db:
        close_db()


app = FastAPI(title="todo-sync API", default_response_class=UnicodeJSONResponse, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

_STATUS_CODES = {
    NotFound: 404,
    ValidationFailed: 400,
    BackendUnavailable: 503,
}


@app.exception_handler(TodoStoreError)
async def store_error_handler(request: Request, exc: TodoStoreError):
    status_code = next((code for cls, code in _STATUS_CODES.items() if isinstance(exc, cls)), 500)
    if status_code >= 500:
        logger.warning("{} {} failed: {}", request.method, request.url.path, exc)
    return UnicodeJSONResponse({"message": str(exc)}, status_code=status_code)


api_router = APIRouter(prefix="/api")
api_router.include_router(todo_router)
api_router.include_router(tag_router)
app.include_router(api_router)


def main():
    uvicorn.run("todoapi.main:app", host="0.0.0.0", port=int(os.getenv("TODO_API_PORT", "8000")))


if __name__ == "__main__":
    main()
