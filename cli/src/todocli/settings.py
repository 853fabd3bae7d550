"""Settings loaded from the environment (and .env, loaded by the CLI entry point)."""

import os

DEFAULT_API_URL = "http://localhost:8000"


def _truthy(value) -> bool:
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def load_config() -> dict:
    home = os.path.expanduser(os.getenv("TODO_HOME", "~/.todo-sync"))
    database_url = os.getenv("TODO_DATABASE_URL")
    if not database_url:
        os.makedirs(home, exist_ok=True)
        database_url = f"sqlite:///{os.path.join(home, 'todo.db')}"
    return {
        "home": home,
        "backend": os.getenv("TODO_BACKEND", "local").strip().lower(),
        "database_url": database_url,
        "api_url": os.getenv("TODO_API_URL", DEFAULT_API_URL),
        "api_timeout": float(os.getenv("TODO_API_TIMEOUT", "30")),
        "timezone": os.getenv("TODO_TIMEZONE"),
        "require_tags": _truthy(os.getenv("TODO_REQUIRE_TAGS", "0")),
    }
