from todostore.exceptions import ValidationFailed
from todostore.gateway.base import TodoGateway
from todostore.gateway.local import LocalGateway
from todostore.gateway.remote import RemoteGateway


def create_gateway(config) -> TodoGateway:
    """Build the gateway selected by `backend` in a config mapping."""
    backend = config.get("backend", "local")
    if backend == "remote":
        return RemoteGateway(config["api_url"], timeout=float(config.get("api_timeout", 30)))
    if backend == "local":
        return LocalGateway(config.get("database_url"))
    raise ValidationFailed(f"Unknown backend: {backend!r}")


__all__ = ["TodoGateway", "LocalGateway", "RemoteGateway", "create_gateway"]
