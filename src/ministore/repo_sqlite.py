from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from ministore.errors import PersistenceError
from ministore.models import Base, OptionModel
from ministore.utils import now_utc

logger = logging.getLogger(__name__)


class SQLiteOptionRepo:
    def __init__(self, session_factory: sessionmaker) -> None:
        self._Session = session_factory

    def get(self, key: str) -> bytes | None:
        try:
            with self._Session() as session:
                row = session.get(OptionModel, key)
                return bytes(row.value) if row and row.value is not None else None
        except SQLAlchemyError as exc:
            logger.exception("Option read failed: %s", key)
            raise PersistenceError() from exc

    def set(self, key: str, value: bytes) -> None:
        try:
            with self._Session() as session:
                row = session.get(OptionModel, key)
                if row:
                    row.value = value
                    row.updated_at = now_utc()
                else:
                    session.add(OptionModel(name=key, value=value, updated_at=now_utc()))
                session.commit()
        except SQLAlchemyError as exc:
            logger.exception("Option write failed: %s", key)
            raise PersistenceError() from exc


class SQLiteStorage:
    def __init__(self, db_path: Path) -> None:
        self._engine = create_engine(f"sqlite:///{db_path}", future=True)
        self._Session = sessionmaker(self._engine, expire_on_commit=False)
        Base.metadata.create_all(self._engine)
        self.options = SQLiteOptionRepo(self._Session)
