from ministore import catalog
from ministore.catalog import InputKind


def test_catalog_lists_fields_in_display_order():
    ids = [field.id for field in catalog.list_all()]
    assert ids == ["name", "email", "phone", "message", "address", "district", "thana", "tnc"]


def test_get_returns_definition_or_none():
    email = catalog.get("email")
    assert email is not None
    assert email.label == "Email"
    assert email.input_kind is InputKind.EMAIL
    assert catalog.get("xyz") is None


def test_tnc_has_empty_placeholder():
    tnc = catalog.get("tnc")
    assert tnc.label == "T&C Checkbox"
    assert tnc.placeholder == ""
    assert tnc.input_kind is InputKind.CHECKBOX


def test_list_all_returns_a_copy():
    fields = catalog.list_all()
    fields.clear()
    assert len(catalog.list_all()) == 8


def test_catalog_by_id_keeps_order_and_types():
    by_id = catalog.catalog_by_id()
    assert list(by_id) == [field.id for field in catalog.list_all()]
    assert by_id["district"]["type"] == "select"
    assert by_id["phone"]["placeholder"] == "Enter your phone number"
