from fastapi import APIRouter
from pydantic import BaseModel

from todostore.gateway.local import LocalGateway
from todostore.service import tag as tag_service

router = APIRouter(prefix="/tags")


def _gateway() -> LocalGateway:
    return LocalGateway()


class TagRequest(BaseModel):
    name: str


@router.get("")
async def list_tags():
    return [t.to_dict() for t in _gateway().list_tags()]


@router.post("", status_code=201)
async def create_tag(req: TagRequest):
    return tag_service.create_tag(_gateway(), req.name).to_dict()


@router.delete("")
async def clear_tags():
    _gateway().clear_tags()
    return {"success": True}


@router.get("/{name:path}/usage")
async def tag_usage(name: str):
    return {"name": name, "count": tag_service.usage_count(_gateway(), name)}


@router.delete("/{name:path}")
async def delete_tag(name: str):
    stripped = tag_service.delete_tag(_gateway(), name)
    return {"success": True, "stripped": stripped}
