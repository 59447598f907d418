from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import orjson


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat()


def dumps_json(value: Any) -> str:
    return orjson.dumps(value).decode("utf-8")
