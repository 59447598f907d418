from __future__ import annotations

from typing import Protocol

from ministore.config import Settings, ensure_dirs
from ministore.repo_json import JSONStorage
from ministore.repo_sqlite import SQLiteStorage


class OptionRepository(Protocol):
    def get(self, key: str) -> bytes | None: ...

    def set(self, key: str, value: bytes) -> None: ...


class Storage(Protocol):
    options: OptionRepository


def init_storage(settings: Settings) -> Storage:
    ensure_dirs(settings)
    if settings.storage_backend == "json":
        return JSONStorage(settings.json_path)
    return SQLiteStorage(settings.sqlite_path)
