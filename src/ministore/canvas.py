"""In-memory state of the form builder canvas.

A catalog field is either available in the palette or active on the canvas.
Edits only touch this state; nothing reaches the server until ``begin_save``
hands the ordered candidate list to a client.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable

from ministore.catalog import FieldDefinition, InputKind
from ministore.errors import GENERIC_ERROR_MESSAGE, SaveInProgressError

EMPTY_LABEL_MIRROR = "—"


class FieldSlotState(str, Enum):
    AVAILABLE = "available"
    ACTIVE = "active"


@dataclass
class CanvasField:
    id: str
    label: str
    placeholder: str
    required: bool = False
    input_kind: InputKind = InputKind.TEXT


@dataclass(frozen=True)
class Notice:
    message: str
    kind: str  # "success" or "error"


class CanvasState:
    def __init__(
        self,
        definitions: Iterable[FieldDefinition],
        saved: Iterable[dict[str, Any]] = (),
    ) -> None:
        self._definitions = {definition.id: definition for definition in definitions}
        self._active: list[CanvasField] = []
        self.saving = False
        self.notice: Notice | None = None
        for item in saved:
            definition = self._definitions.get(str(item.get("id", "")))
            if definition is None or self.is_active(definition.id):
                continue
            self._active.append(
                CanvasField(
                    id=definition.id,
                    label=str(item.get("label") or ""),
                    placeholder=str(item.get("placeholder") or ""),
                    required=bool(item.get("required")),
                    input_kind=definition.input_kind,
                )
            )

    @classmethod
    def from_bootstrap(cls, payload: dict[str, Any]) -> "CanvasState":
        definitions = [
            FieldDefinition(
                id=field_id,
                label=str(raw.get("label", "")),
                placeholder=str(raw.get("placeholder", "")),
                icon=str(raw.get("icon", "")),
                input_kind=InputKind(raw.get("type", InputKind.TEXT.value)),
            )
            for field_id, raw in (payload.get("fields") or {}).items()
        ]
        return cls(definitions, payload.get("saved") or [])

    @property
    def fields(self) -> list[CanvasField]:
        return list(self._active)

    def active_ids(self) -> list[str]:
        return [field.id for field in self._active]

    def available_ids(self) -> list[str]:
        active = set(self.active_ids())
        return [field_id for field_id in self._definitions if field_id not in active]

    def is_active(self, field_id: str) -> bool:
        return any(field.id == field_id for field in self._active)

    def slot_state(self, field_id: str) -> FieldSlotState:
        if field_id not in self._definitions:
            raise KeyError(field_id)
        return FieldSlotState.ACTIVE if self.is_active(field_id) else FieldSlotState.AVAILABLE

    def add(self, field_id: str) -> bool:
        """Place a catalog field on the canvas. Returns False when nothing changed."""
        definition = self._definitions.get(field_id)
        if definition is None or self.is_active(field_id):
            return False
        self._active.append(
            CanvasField(
                id=definition.id,
                label=definition.label,
                placeholder=definition.placeholder,
                input_kind=definition.input_kind,
            )
        )
        return True

    def remove(self, field_id: str) -> bool:
        for index, field in enumerate(self._active):
            if field.id == field_id:
                del self._active[index]
                return True
        return False

    def move(self, field_id: str, index: int) -> None:
        field = self._get(field_id)
        self._active.remove(field)
        index = max(0, min(index, len(self._active)))
        self._active.insert(index, field)

    def edit_label(self, field_id: str, label: str) -> None:
        self._get(field_id).label = label

    def edit_placeholder(self, field_id: str, placeholder: str) -> None:
        self._get(field_id).placeholder = placeholder

    def set_required(self, field_id: str, required: bool) -> None:
        self._get(field_id).required = required

    def display_label(self, field_id: str) -> str:
        return self._get(field_id).label.strip() or EMPTY_LABEL_MIRROR

    def begin_save(self) -> list[dict[str, Any]]:
        if self.saving:
            raise SaveInProgressError()
        self.saving = True
        self.notice = None
        return [
            {
                "id": field.id,
                "label": field.label,
                "placeholder": field.placeholder,
                "required": "1" if field.required else "0",
                "order": position,
            }
            for position, field in enumerate(self._active)
        ]

    def finish_save(self, success: bool, message: str | None = None) -> Notice:
        self.saving = False
        if success:
            self.notice = Notice(message or "Changes saved!", "success")
        else:
            self.notice = Notice(message or GENERIC_ERROR_MESSAGE, "error")
        return self.notice

    def _get(self, field_id: str) -> CanvasField:
        for field in self._active:
            if field.id == field_id:
                return field
        raise KeyError(field_id)
