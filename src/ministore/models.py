from __future__ import annotations

from sqlalchemy import Column, DateTime, LargeBinary, String
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class OptionModel(Base):
    __tablename__ = "options"

    name = Column(String, primary_key=True)
    value = Column(LargeBinary)
    updated_at = Column(DateTime)
