"""Unit tests for field type matching and schema loading."""

import pytest

from services.schema import (
    ARRAY,
    CUSTOM,
    NUMBER,
    describe_type,
    load_schema,
    matches_allowed_value,
    matches_type,
    type_label,
)

# ---------------------------------------------------------------------------
# matches_type
# ---------------------------------------------------------------------------


def test_string_tag_matches_str():
    assert matches_type("hello", "string") == (True, "String")


def test_tag_is_case_insensitive():
    assert matches_type("hello", "String") == (True, "String")


def test_string_rejects_number():
    assert matches_type(3, "string") == (False, "String")


def test_number_matches_int_and_float():
    assert matches_type(3, "number")[0] is True
    assert matches_type(2.5, "number")[0] is True


def test_number_rejects_bool():
    assert matches_type(True, "number") == (False, "Number")


def test_boolean_rejects_string():
    assert matches_type("yes", "boolean") == (False, "Boolean")


def test_builtin_types_map_to_tags():
    assert matches_type("x", str) == (True, "String")
    assert matches_type(1, int) == (True, "Number")
    assert matches_type(1.5, int) == (True, "Number")
    assert matches_type(False, bool) == (True, "Boolean")


def test_array_and_object_tags():
    assert matches_type(["a"], "array") == (True, "Array")
    assert matches_type("a", "Array") == (False, "Array")
    assert matches_type({"k": 1}, "object") == (True, "Object")
    assert matches_type(["a"], "object") == (False, "Object")


def test_list_and_dict_map_to_tags():
    assert matches_type(["a"], list) == (True, "Array")
    assert matches_type({"k": 1}, dict) == (True, "Object")


def test_other_class_checked_nominally():
    class Author(str):
        pass

    assert matches_type(Author("ada"), Author) == (True, "Author")
    assert matches_type("ada", Author) == (False, "Author")


def test_custom_predicate():
    def slug(value):
        return isinstance(value, str) and value == value.lower() and " " not in value

    assert matches_type("my-page", slug) == (True, "slug")
    assert matches_type("My Page", slug) == (False, "slug")


def test_unknown_tag_raises():
    with pytest.raises(ValueError):
        describe_type("symbol-ish")


def test_describe_type_custom_tag():
    assert describe_type(set).tag == CUSTOM
    assert describe_type(float).tag == NUMBER
    assert describe_type(list).tag == ARRAY


# ---------------------------------------------------------------------------
# matches_allowed_value
# ---------------------------------------------------------------------------


def test_allowed_value_member():
    assert matches_allowed_value("a", ["a", "b"]) is True


def test_allowed_value_not_member():
    assert matches_allowed_value("c", ["a", "b"]) is False


def test_allowed_value_no_case_folding():
    assert matches_allowed_value("A", ["a", "b"]) is False


def test_allowed_value_no_coercion():
    assert matches_allowed_value("1", [1, 2]) is False
    assert matches_allowed_value(True, [1]) is False
    assert matches_allowed_value(1, [1, 2]) is True


# ---------------------------------------------------------------------------
# type_label
# ---------------------------------------------------------------------------


def test_type_labels():
    assert type_label("x") == "string"
    assert type_label(1) == "number"
    assert type_label(True) == "boolean"
    assert type_label([1]) == "array"
    assert type_label({"a": 1}) == "object"
    assert type_label(None) == "null"


# ---------------------------------------------------------------------------
# load_schema
# ---------------------------------------------------------------------------


def test_load_schema_resolves_types_and_required():
    schema = load_schema(
        {
            "title": {"type": "string", "required": True},
            "draft": {"type": "boolean"},
        }
    )
    assert list(schema) == ["title", "draft"]
    assert schema["title"]["type"].label == "String"
    assert schema["title"]["required"] is True
    assert schema["draft"]["required"] is False


def test_load_schema_required_must_be_true_not_truthy():
    schema = load_schema({"title": {"type": "string", "required": "yes"}})
    assert schema["title"]["required"] is False


def test_load_schema_rejects_non_mapping():
    with pytest.raises(ValueError):
        load_schema(["title"])


def test_load_schema_rejects_missing_type():
    with pytest.raises(ValueError):
        load_schema({"title": {"required": True}})


def test_load_schema_rejects_bad_allowed_values():
    with pytest.raises(ValueError):
        load_schema({"tags": {"type": "string", "allowedValues": "a"}})


def test_load_schema_array_field():
    schema = load_schema({"tags": {"type": "array", "default": []}})
    assert schema["tags"]["type"].tag == ARRAY
    assert schema["tags"]["type"].label == "Array"


def test_load_schema_keeps_default():
    schema = load_schema({"layout": {"type": "string", "default": "single"}})
    assert schema["layout"]["default"] == "single"
