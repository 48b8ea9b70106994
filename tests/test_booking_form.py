"""Tests for the booking form builder and submission validation."""
import pytest

from documentmitra.core.exceptions import BookingFormError, InvalidFormActionError
from documentmitra.models.service import BookingConfig, FieldType, FormField
from documentmitra.services.booking_form import (
    AddDocumentRequirement, AddFormField, RemoveFormField, UpdateDocumentRequirement,
    UpdateFormField, apply_action, build_submission_model, form_json_schema, parse_action,
    validate_submission,
)

from conftest import PASSPORT_FORM

VALID_DETAILS = {
    "full_name": "Asha Verma",
    "dob": "1990-04-12",
    "mobile": "+91 98765 43210",
    "email": "",
}


# ─── Form builder ────────────────────────────────────────────────────

def test_add_form_field_defaults():
    config = apply_action(None, AddFormField())
    assert len(config.form_fields) == 1
    field = config.form_fields[0]
    assert field.id.startswith("field_")
    assert field.label == "New Field"
    assert field.type == FieldType.TEXT
    assert field.required is False
    assert config.document_requirements == []


def test_actions_return_new_config():
    original = BookingConfig(form_fields=[FormField(id="name", label="Name")])
    updated = apply_action(original, UpdateFormField(index=0, field="required", value=True))
    assert updated.form_fields[0].required is True
    assert original.form_fields[0].required is False


def test_update_field_type_is_validated():
    config = BookingConfig(form_fields=[FormField(id="age", label="Age")])
    updated = apply_action(config, UpdateFormField(index=0, field="type", value="number"))
    assert updated.form_fields[0].type == FieldType.NUMBER
    with pytest.raises(BookingFormError):
        apply_action(config, UpdateFormField(index=0, field="type", value="colour"))


def test_remove_form_field():
    config = BookingConfig(form_fields=[FormField(id="a", label="A"), FormField(id="b", label="B")])
    updated = apply_action(config, RemoveFormField(index=0))
    assert [f.id for f in updated.form_fields] == ["b"]


def test_index_out_of_range():
    with pytest.raises(InvalidFormActionError):
        apply_action(BookingConfig(), RemoveFormField(index=0))
    with pytest.raises(InvalidFormActionError):
        apply_action(BookingConfig(), UpdateDocumentRequirement(index=3, field="name", value="x"))


def test_document_requirements():
    config = apply_action(None, AddDocumentRequirement())
    doc = config.document_requirements[0]
    assert doc.id.startswith("doc_")
    assert (doc.name, doc.description) == ("New Document", "Description")

    renamed = apply_action(config, UpdateDocumentRequirement(index=0, field="name", value="Photo"))
    assert renamed.document_requirements[0].name == "Photo"


def test_parse_action():
    action = parse_action({"action": "update_form_field", "index": 0, "field": "label", "value": "Name"})
    assert isinstance(action, UpdateFormField)
    with pytest.raises(BookingFormError):
        parse_action({"action": "drop_table"})


# ─── Submission validation ───────────────────────────────────────────

def test_valid_submission():
    assert validate_submission(PASSPORT_FORM, VALID_DETAILS, ["poi"]) == {}


def test_missing_required_fields_and_documents():
    errors = validate_submission(PASSPORT_FORM, {"full_name": "   "}, [])
    assert errors["full_name"] == "Full Name is required."
    assert errors["dob"] == "Date of Birth is required."
    assert errors["mobile"] == "Mobile Number is required."
    assert errors["poi"] == "Proof of Identity is required."
    assert "email" not in errors


def test_type_checks():
    details = dict(VALID_DETAILS, dob="12/04/1990", mobile="call me", email="not-an-email")
    errors = validate_submission(PASSPORT_FORM, details, ["poi"])
    assert set(errors) == {"dob", "mobile", "email"}
    assert errors["email"].startswith("Email:")


def test_number_field_accepts_numeric_strings():
    config = BookingConfig(form_fields=[FormField(id="income", label="Annual Income", type="number", required=True)])
    assert validate_submission(config, {"income": "250000"}) == {}
    assert "income" in validate_submission(config, {"income": "lots"})


def test_field_ids_that_are_not_identifiers():
    config = BookingConfig(form_fields=[FormField(id="father-name", label="Father's Name", required=True)])
    assert validate_submission(config, {"father-name": "Ravi"}) == {}
    assert validate_submission(config, {}) == {"father-name": "Father's Name is required."}


def test_empty_config_accepts_anything():
    assert validate_submission(None, {"anything": 1}) == {}


def test_submission_model_and_schema():
    model = build_submission_model(PASSPORT_FORM)
    parsed = model.model_validate({"full_name": "Asha", "dob": "1990-04-12", "mobile": "9876543210"})
    assert str(parsed.field_1) == "1990-04-12"

    schema = form_json_schema(PASSPORT_FORM)
    assert set(schema["form"]["required"]) == {"full_name", "dob", "mobile"}
    assert schema["form"]["properties"]["email"]["title"] == "Email"
    assert schema["documents"][0]["id"] == "poi"
