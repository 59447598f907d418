"""Fixed catalog of checkout fields an administrator can place on the form."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class InputKind(str, Enum):
    TEXT = "text"
    EMAIL = "email"
    TEL = "tel"
    TEXTAREA = "textarea"
    SELECT = "select"
    CHECKBOX = "checkbox"


@dataclass(frozen=True)
class FieldDefinition:
    id: str
    label: str
    placeholder: str
    icon: str
    input_kind: InputKind

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "placeholder": self.placeholder,
            "icon": self.icon,
            "type": self.input_kind.value,
        }


AVAILABLE_FIELDS: tuple[FieldDefinition, ...] = (
    FieldDefinition("name", "Name", "Enter your name", "dashicons-admin-users", InputKind.TEXT),
    FieldDefinition("email", "Email", "Enter your email address", "dashicons-email-alt", InputKind.EMAIL),
    FieldDefinition("phone", "Phone", "Enter your phone number", "dashicons-phone", InputKind.TEL),
    FieldDefinition("message", "Message", "Enter your message", "dashicons-format-chat", InputKind.TEXTAREA),
    FieldDefinition("address", "Address", "Enter your full address", "dashicons-location", InputKind.TEXT),
    FieldDefinition("district", "District", "Select your district", "dashicons-building", InputKind.SELECT),
    FieldDefinition("thana", "Thana", "Select your thana", "dashicons-flag", InputKind.SELECT),
    FieldDefinition("tnc", "T&C Checkbox", "", "dashicons-yes-alt", InputKind.CHECKBOX),
)

_BY_ID: dict[str, FieldDefinition] = {field.id: field for field in AVAILABLE_FIELDS}


def list_all() -> list[FieldDefinition]:
    return list(AVAILABLE_FIELDS)


def get(field_id: str) -> FieldDefinition | None:
    return _BY_ID.get(field_id)


def field_ids() -> frozenset[str]:
    return frozenset(_BY_ID)


def catalog_by_id() -> dict[str, dict[str, Any]]:
    """Catalog keyed by field id, in display order, for the builder bootstrap."""
    return {field.id: field.as_dict() for field in AVAILABLE_FIELDS}
