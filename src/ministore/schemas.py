"""Pydantic request schemas for the form builder endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class SaveFieldsRequest(BaseModel):
    action: str
    # Entries stay raw so that malformed ones can be dropped one by one.
    fields: list[Any] = Field(default_factory=list)
