"""Tag registry service."""

from typing import List, Tuple

from loguru import logger

from todostore.entity.dto import Tag
from todostore.exceptions import ValidationFailed
from todostore.gateway.base import TodoGateway


def create_tag(gateway: TodoGateway, name: str) -> Tag:
    if not isinstance(name, str) or not name.strip():
        raise ValidationFailed("Tag name is required")
    name = name.strip()
    existing = gateway.get_tag(name)
    if existing:
        return existing
    tag = gateway.add_tag(name)
    logger.info("created tag {}", name)
    return tag


def delete_tag(gateway: TodoGateway, name: str) -> int:
    """Remove a tag and strip it from every todo. Returns how many todos lost the tag."""
    stripped = gateway.remove_tag(name)
    logger.info("deleted tag {} (stripped from {} todos)", name, stripped)
    return stripped


def usage_count(gateway: TodoGateway, name: str) -> int:
    return gateway.tag_usage(name)


def list_tags(gateway: TodoGateway) -> List[Tuple[Tag, int]]:
    todos = gateway.list_all()
    result = []
    for tag in gateway.list_tags():
        result.append((tag, sum(1 for t in todos if tag.name in t.tags)))
    return result
