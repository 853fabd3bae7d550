"""Plain data objects passed between the store, the gateways and callers.

`to_dict` produces the camelCase wire format shared by the REST API and
exported snapshots.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from todostore.exceptions import ValidationFailed
from todostore.util import parse_timestamp


class Status(str, Enum):
    TODO = "todo"
    PLANNED = "planned"
    ONGOING = "ongoing"
    DONE = "done"

    @classmethod
    def parse(cls, value) -> "Status":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValidationFailed(f"Invalid status: {value!r}")


STATUS_SEQUENCE = (Status.TODO, Status.PLANNED, Status.ONGOING, Status.DONE)


def normalize_tags(tags: Optional[Iterable[str]]) -> List[str]:
    """De-duplicate tag names keeping first-seen order; blanks are dropped."""
    result: List[str] = []
    for name in tags or []:
        if not isinstance(name, str):
            raise ValidationFailed(f"Invalid tag: {name!r}")
        name = name.strip()
        if name and name not in result:
            result.append(name)
    return result


@dataclass
class Todo:
    id: Optional[str]
    text: str
    status: Status = Status.TODO
    created_at: Optional[str] = None
    ongoing_start_time: Optional[str] = None
    completed_at: Optional[str] = None
    image: Optional[str] = None
    tags: List[str] = field(default_factory=list)

    def copy(self, **changes) -> "Todo":
        changes.setdefault("tags", list(self.tags))
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "status": Status.parse(self.status).value,
            "createdAt": self.created_at,
            "tags": list(self.tags),
        }
        if self.ongoing_start_time:
            data["ongoingStartTime"] = self.ongoing_start_time
        if self.completed_at:
            data["completedAt"] = self.completed_at
        if self.image:
            data["image"] = self.image
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Todo":
        if not isinstance(data, dict):
            raise ValidationFailed("Todo record must be an object")
        text = data.get("text")
        if not isinstance(text, str) or not text.strip():
            raise ValidationFailed("Todo text is required")
        todo_id = data.get("id", data.get("_id"))
        if todo_id is not None:
            todo_id = str(todo_id)
        if "tags" in data and data["tags"] is not None:
            if not isinstance(data["tags"], list):
                raise ValidationFailed("Todo tags must be a list")
            tags = normalize_tags(data["tags"])
        elif data.get("tag"):
            tags = normalize_tags([data["tag"]])
        else:
            tags = []
        image = data.get("image")
        if image is not None and not isinstance(image, str):
            raise ValidationFailed("Todo image must be a string")
        return cls(
            id=todo_id,
            text=text.strip(),
            status=Status.parse(data.get("status") or Status.TODO),
            created_at=parse_timestamp(data.get("createdAt")),
            ongoing_start_time=parse_timestamp(data.get("ongoingStartTime")),
            completed_at=parse_timestamp(data.get("completedAt")),
            image=image or None,
            tags=tags,
        )


@dataclass
class Tag:
    name: str
    created_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "createdAt": self.created_at}
