"""Tests for the validate-then-bind parameter extractor."""
import pytest

from app.core.operations import ParameterValidationError, extract_arguments
from app.core.operations.fields import FieldKind, optional, required

FIELDS = (
    required("realm"),
    required("userId", "user_id"),
    optional("temporary", False, kind=FieldKind.BOOL),
)


def test_binds_public_names_to_keyword_arguments():
    args = extract_arguments("RESET", FIELDS, {"realm": "demo", "userId": "u1", "temporary": True})
    assert args == {"realm": "demo", "user_id": "u1", "temporary": True}


def test_optional_field_takes_default():
    args = extract_arguments("RESET", FIELDS, {"realm": "demo", "userId": "u1"})
    assert args["temporary"] is False


def test_null_counts_as_absent():
    args = extract_arguments("RESET", FIELDS, {"realm": "demo", "userId": "u1", "temporary": None})
    assert args["temporary"] is False

    with pytest.raises(ParameterValidationError) as excinfo:
        extract_arguments("RESET", FIELDS, {"realm": None, "userId": "u1"})
    assert excinfo.value.field == "realm"


def test_first_missing_field_in_declaration_order_is_reported():
    with pytest.raises(ParameterValidationError) as excinfo:
        extract_arguments("RESET", FIELDS, {})
    assert excinfo.value.field == "realm"
    assert excinfo.value.operation == "RESET"
    assert excinfo.value.message == "missing required field 'realm' for RESET"


def test_unknown_keys_are_ignored():
    args = extract_arguments("RESET", FIELDS, {"realm": "demo", "userId": "u1", "extra": 1})
    assert "extra" not in args


def test_numbers_are_accepted_as_strings():
    args = extract_arguments("RESET", FIELDS, {"realm": 42, "userId": 1.5})
    assert args["realm"] == "42"
    assert args["user_id"] == "1.5"


@pytest.mark.parametrize("value", [True, ["a"], {"a": 1}])
def test_non_text_values_rejected_for_string_fields(value):
    with pytest.raises(ParameterValidationError) as excinfo:
        extract_arguments("RESET", FIELDS, {"realm": value, "userId": "u1"})
    assert excinfo.value.field == "realm"


@pytest.mark.parametrize("value", ["true", 1, 0])
def test_bool_fields_require_json_booleans(value):
    with pytest.raises(ParameterValidationError) as excinfo:
        extract_arguments("RESET", FIELDS, {"realm": "demo", "userId": "u1", "temporary": value})
    assert excinfo.value.field == "temporary"


def test_object_fields_bind_a_copy():
    fields = (required("userRepresentation", "user", FieldKind.OBJECT),)
    representation = {"firstName": "Ada"}
    args = extract_arguments("UPDATE_USER", fields, {"userRepresentation": representation})
    assert args["user"] == representation
    assert args["user"] is not representation


def test_object_fields_reject_text():
    fields = (required("userRepresentation", "user", FieldKind.OBJECT),)
    with pytest.raises(ParameterValidationError, match="must be of type object"):
        extract_arguments("UPDATE_USER", fields, {"userRepresentation": "{}"})
