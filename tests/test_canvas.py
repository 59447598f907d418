import pytest

from ministore import catalog
from ministore.canvas import CanvasState, FieldSlotState
from ministore.errors import SaveInProgressError


@pytest.fixture
def canvas():
    return CanvasState(catalog.list_all())


def test_new_canvas_is_empty(canvas):
    assert canvas.active_ids() == []
    assert canvas.available_ids() == [field.id for field in catalog.list_all()]


def test_add_is_idempotent(canvas):
    assert canvas.add("email") is True
    assert canvas.add("email") is False
    assert canvas.active_ids() == ["email"]
    assert canvas.slot_state("email") is FieldSlotState.ACTIVE


def test_add_uses_catalog_defaults(canvas):
    canvas.add("phone")
    field = canvas.fields[0]
    assert (field.label, field.placeholder, field.required) == ("Phone", "Enter your phone number", False)


def test_add_ignores_unknown_ids(canvas):
    assert canvas.add("xyz") is False
    assert canvas.active_ids() == []


def test_remove_frees_slot_for_re_adding(canvas):
    canvas.add("name")
    assert canvas.remove("name") is True
    assert canvas.slot_state("name") is FieldSlotState.AVAILABLE
    assert canvas.remove("name") is False
    assert canvas.add("name") is True


def test_move_reorders(canvas):
    for field_id in ("name", "email", "phone"):
        canvas.add(field_id)
    canvas.move("phone", 0)
    assert canvas.active_ids() == ["phone", "name", "email"]
    canvas.move("phone", 99)
    assert canvas.active_ids() == ["name", "email", "phone"]


def test_label_mirror_is_derived(canvas):
    canvas.add("name")
    canvas.edit_label("name", "   ")
    assert canvas.display_label("name") == "—"
    canvas.edit_label("name", "  Full name ")
    assert canvas.display_label("name") == "Full name"
    assert canvas.fields[0].label == "  Full name "


def test_begin_save_collects_candidates_in_order(canvas):
    canvas.add("email")
    canvas.add("tnc")
    canvas.set_required("tnc", True)
    canvas.edit_placeholder("email", "you@example.com")

    candidates = canvas.begin_save()

    assert candidates == [
        {"id": "email", "label": "Email", "placeholder": "you@example.com", "required": "0", "order": 0},
        {"id": "tnc", "label": "T&C Checkbox", "placeholder": "", "required": "1", "order": 1},
    ]
    assert canvas.saving is True


def test_only_one_save_outstanding(canvas):
    canvas.begin_save()
    with pytest.raises(SaveInProgressError):
        canvas.begin_save()
    canvas.finish_save(True, "Saved")
    canvas.begin_save()


def test_failed_save_keeps_canvas(canvas):
    canvas.add("name")
    canvas.begin_save()
    notice = canvas.finish_save(False)

    assert notice.kind == "error"
    assert notice.message == "Something went wrong. Please try again."
    assert canvas.active_ids() == ["name"]
    assert canvas.saving is False


def test_from_bootstrap_restores_saved_fields():
    payload = {
        "fields": catalog.catalog_by_id(),
        "saved": [
            {"id": "phone", "label": "Mobile", "placeholder": "", "required": True, "order": 0},
            {"id": "ghost", "label": "Gone", "placeholder": "", "required": False, "order": 1},
            {"id": "phone", "label": "Dup", "placeholder": "", "required": False, "order": 2},
        ],
    }
    canvas = CanvasState.from_bootstrap(payload)

    assert canvas.active_ids() == ["phone"]
    assert canvas.fields[0].label == "Mobile"
    assert canvas.fields[0].required is True
    assert "phone" not in canvas.available_ids()


def test_edit_unknown_field_raises(canvas):
    with pytest.raises(KeyError):
        canvas.edit_label("name", "x")
    with pytest.raises(KeyError):
        canvas.slot_state("xyz")
