import os
import re
import time
from datetime import datetime, timezone
from typing import Optional

from todostore.exceptions import ValidationFailed

_NATIVE_ID_RE = re.compile(r"^[0-9a-f]{24}$", re.IGNORECASE)


def generate_id() -> str:
    """Backend-native id: 4 bytes of creation time then 8 random bytes, hex encoded."""
    return f"{int(time.time()):08x}{os.urandom(8).hex()}"


def is_native_id(value) -> bool:
    return isinstance(value, str) and bool(_NATIVE_ID_RE.match(value))


def generate_temp_id() -> str:
    return str(get_unix_timestamp())


def get_unix_timestamp() -> int:
    return int(time.time() * 1000)


def format_timestamp(dt: datetime) -> str:
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def get_utc_iso8601_timestamp() -> str:
    return format_timestamp(datetime.now(timezone.utc))


def parse_timestamp(value) -> Optional[str]:
    """Normalize an ISO 8601 value to the canonical UTC form. Naive values are taken as UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        try:
            dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            raise ValidationFailed(f"Invalid timestamp: {value!r}")
    else:
        raise ValidationFailed(f"Invalid timestamp: {value!r}")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return format_timestamp(dt)


def to_datetime(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))
