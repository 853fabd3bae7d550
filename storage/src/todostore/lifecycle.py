"""Status transitions and the timestamp bookkeeping that goes with them.

Everything here is pure: functions take a Todo and return a new one.
A todo carries `ongoing_start_time` only while it is ongoing and
`completed_at` only while it is done.
"""

import re
from datetime import datetime, timezone
from typing import Iterable, Optional, Tuple

from todostore.entity.dto import STATUS_SEQUENCE, Status, Todo, normalize_tags
from todostore.exceptions import ValidationFailed
from todostore.util import generate_temp_id, get_utc_iso8601_timestamp, to_datetime

_PREFIX_STATUS = {
    "plan": Status.PLANNED,
    "going": Status.ONGOING,
    "done": Status.DONE,
}
_PREFIX_RE = re.compile(r"^(plan|going|done)\s+", re.IGNORECASE)


def transition(todo: Todo, new_status, now: Optional[str] = None) -> Todo:
    new_status = Status.parse(new_status)
    now = now or get_utc_iso8601_timestamp()

    ongoing_start_time = todo.ongoing_start_time
    if new_status == Status.ONGOING:
        ongoing_start_time = ongoing_start_time or now
    else:
        ongoing_start_time = None

    completed_at = todo.completed_at
    if new_status == Status.DONE:
        completed_at = completed_at or now
    else:
        completed_at = None

    return todo.copy(
        status=new_status,
        ongoing_start_time=ongoing_start_time,
        completed_at=completed_at,
    )


def cycle_status(status) -> Status:
    status = Status.parse(status)
    index = STATUS_SEQUENCE.index(status)
    return STATUS_SEQUENCE[(index + 1) % len(STATUS_SEQUENCE)]


def parse_status_prefix(raw_text: str) -> Tuple[Status, str]:
    """Split a leading `plan `/`going `/`done ` token off free text."""
    text = (raw_text or "").strip()
    match = _PREFIX_RE.match(text)
    if not match:
        return Status.TODO, text
    return _PREFIX_STATUS[match.group(1).lower()], text[match.end():]


def new_todo(
    raw_text: str,
    image: Optional[str] = None,
    tags: Optional[Iterable[str]] = None,
    now: Optional[str] = None,
) -> Todo:
    """Build an unsaved todo from raw input. The id is temporary until the gateway assigns one."""
    status, text = parse_status_prefix(raw_text)
    if not text:
        raise ValidationFailed("Todo text is required")
    now = now or get_utc_iso8601_timestamp()
    todo = Todo(
        id=generate_temp_id(),
        text=text,
        status=Status.TODO,
        created_at=now,
        image=image or None,
        tags=normalize_tags(tags),
    )
    return transition(todo, status, now=now)


def normalize(todo: Todo, now: Optional[str] = None) -> Todo:
    """Re-establish timestamp invariants on a record of unknown provenance."""
    now = now or get_utc_iso8601_timestamp()
    fixed = transition(todo, todo.status, now=now)
    # created_at never lies in the future; both values are canonical UTC strings
    if not fixed.created_at or fixed.created_at > now:
        fixed.created_at = now
    return fixed


def elapsed(start: Optional[str], now: Optional[datetime] = None) -> str:
    if not start:
        return ""
    now = now or datetime.now(timezone.utc)
    seconds = max(int((now - to_datetime(start)).total_seconds()), 0)
    minutes = seconds // 60
    hours = minutes // 60
    if hours > 0:
        return f"{hours}h {minutes % 60}m"
    if minutes > 0:
        return f"{minutes}m {seconds % 60}s"
    return f"{seconds}s"
