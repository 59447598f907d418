from __future__ import annotations

import base64
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from filelock import FileLock, Timeout
from tinydb import Query, TinyDB

from ministore.errors import PersistenceError
from ministore.utils import now_utc, to_iso

logger = logging.getLogger(__name__)


class JSONRepoBase:
    def __init__(self, path: Path, lock: FileLock) -> None:
        self._path = path
        self._lock = lock

    @contextmanager
    def _db(self) -> Iterator[TinyDB]:
        with self._lock:
            db = TinyDB(self._path)
            try:
                yield db
            finally:
                db.close()


class JSONOptionRepo(JSONRepoBase):
    def get(self, key: str) -> bytes | None:
        try:
            with self._db() as db:
                item = db.table("options").get(Query().name == key)
        except (OSError, Timeout, ValueError) as exc:
            logger.exception("Option read failed: %s", key)
            raise PersistenceError() from exc
        if not item:
            return None
        return base64.b64decode(item["value"])

    def set(self, key: str, value: bytes) -> None:
        record = {
            "name": key,
            "value": base64.b64encode(value).decode("ascii"),
            "updated_at": to_iso(now_utc()),
        }
        try:
            with self._db() as db:
                db.table("options").upsert(record, Query().name == key)
        except (OSError, Timeout, ValueError) as exc:
            logger.exception("Option write failed: %s", key)
            raise PersistenceError() from exc


class JSONStorage:
    def __init__(self, path: Path) -> None:
        self._lock = FileLock(f"{path}.lock")
        self.options = JSONOptionRepo(path, self._lock)
