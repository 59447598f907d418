"""Checkout form configuration: validation and whole-document persistence.

The stored document is an ordered list of active fields under a single option
key. Every save replaces the previous document in full; concurrent saves are
last-write-wins at the store.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import orjson

from ministore import catalog
from ministore.auth import NonceService, Requester
from ministore.config import MANAGE_OPTIONS, NONCE_ACTION, OPTION_KEY
from ministore.errors import AuthenticityError, AuthorizationError
from ministore.sanitize import parse_bool, sanitize_key, sanitize_text
from ministore.storage import OptionRepository

logger = logging.getLogger(__name__)


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


@dataclass(frozen=True)
class ActiveField:
    id: str
    label: str
    placeholder: str
    required: bool
    order: int

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "placeholder": self.placeholder,
            "required": self.required,
            "order": self.order,
        }


@dataclass(frozen=True)
class SaveResult:
    fields: list[ActiveField]
    dropped: int


def normalize_fields(raw_fields: Any, clean_text: bool = True) -> tuple[list[ActiveField], int]:
    """Filter, sanitize, de-duplicate and densely re-number candidate entries.

    Returns the surviving fields and the number of entries discarded. Entries
    that are not mappings, carry an id outside the catalog, or repeat an id
    already seen are dropped; the first occurrence of an id wins. With
    ``clean_text`` off, labels and placeholders are kept as stored.
    """
    text = sanitize_text if clean_text else _as_text
    if not isinstance(raw_fields, (list, tuple)):
        return [], 0

    allowed = catalog.field_ids()
    seen: set[str] = set()
    fields: list[ActiveField] = []
    dropped = 0
    for index, raw in enumerate(raw_fields):
        if not isinstance(raw, Mapping):
            logger.debug("Dropping non-record entry at position %d", index)
            dropped += 1
            continue
        field_id = sanitize_key(raw.get("id"))
        if field_id not in allowed:
            logger.debug("Dropping unknown field id at position %d: %r", index, field_id)
            dropped += 1
            continue
        if field_id in seen:
            logger.debug("Dropping duplicate field id at position %d: %s", index, field_id)
            dropped += 1
            continue
        seen.add(field_id)
        fields.append(
            ActiveField(
                id=field_id,
                label=text(raw.get("label")),
                placeholder=text(raw.get("placeholder")),
                required=parse_bool(raw.get("required")),
                order=len(fields),
            )
        )
    return fields, dropped


class FormConfigurationManager:
    def __init__(self, store: OptionRepository, nonces: NonceService) -> None:
        self._store = store
        self._nonces = nonces

    def load_saved(self) -> list[ActiveField]:
        raw = self._store.get(OPTION_KEY)
        if raw is None:
            return []
        try:
            document = orjson.loads(raw)
        except orjson.JSONDecodeError:
            logger.warning("Stored checkout form configuration is unreadable; ignoring it")
            return []
        # Stored entries are already sanitized; this re-filters against the
        # current catalog in case it lost fields since the last save.
        fields, dropped = normalize_fields(document, clean_text=False)
        if dropped:
            logger.info("Ignored %d stored checkout fields no longer in the catalog", dropped)
        return fields

    def check_access(self, requester: Requester) -> None:
        if not self._nonces.verify_token(requester.token, NONCE_ACTION, requester.principal):
            logger.warning("Rejected checkout form save: invalid token for %s", requester.principal.user_id)
            raise AuthenticityError()
        if not requester.principal.can(MANAGE_OPTIONS):
            logger.warning("Rejected checkout form save: %s lacks %s", requester.principal.user_id, MANAGE_OPTIONS)
            raise AuthorizationError()

    def save(self, candidate_fields: Any, requester: Requester) -> SaveResult:
        self.check_access(requester)
        return self.save_checked(candidate_fields, requester)

    def save_checked(self, candidate_fields: Any, requester: Requester) -> SaveResult:
        """Persist candidates for a requester that already passed ``check_access``."""
        fields, dropped = normalize_fields(candidate_fields)
        self._write(fields)
        logger.info(
            "Checkout form saved by %s: %d fields, %d dropped",
            requester.principal.user_id,
            len(fields),
            dropped,
        )
        return SaveResult(fields=fields, dropped=dropped)

    def _write(self, fields: list[ActiveField]) -> None:
        document = [field.as_dict() for field in fields]
        self._store.set(OPTION_KEY, orjson.dumps(document))
