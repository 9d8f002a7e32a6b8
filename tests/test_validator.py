"""
Tests for the document validator.

Tests cover:
- Type checks following BSON typing (int vs double, bool, dates, long)
- Range, length, pattern, enum and arity constraints
- Recursion into arrays and nested objects, with dotted paths
- Strict vs permissive handling of undeclared fields
- Violation ordering, idempotence and malformed documents
"""

import datetime
from concurrent.futures import ThreadPoolExecutor

import pytest
from bson import Decimal128, Int64, ObjectId

from GlobalMarket.mongodb_database.schema_validation import (
    ArityViolation,
    EnumViolation,
    LengthViolation,
    MissingRequiredField,
    PatternViolation,
    RangeViolation,
    SchemaValidator,
    TypeMismatch,
    UnknownFieldViolation,
    load_schema,
    validate,
)


def _schema(properties, required=None, level=None, **extra):
    schema = {"bsonType": "object", "properties": properties, **extra}
    if required is not None:
        schema["required"] = required
    return load_schema("test", {"$jsonSchema": schema}, level)


@pytest.mark.parametrize("exclusive, accepted", [(True, False), (False, True)])
def test_minimum_boundary(exclusive, accepted):
    schema = _schema({"x": {"bsonType": "double", "minimum": 0, "exclusiveMinimum": exclusive}})
    result = validate(schema, {"x": 0.0})
    assert result.accepted is accepted
    if not accepted:
        assert result.violations == (RangeViolation("x", 0, 0.0, "minimum", True),)


@pytest.mark.parametrize("exclusive, accepted", [(True, False), (False, True)])
def test_maximum_boundary(exclusive, accepted):
    schema = _schema({"x": {"bsonType": "int", "maximum": 5, "exclusiveMaximum": exclusive}})
    assert validate(schema, {"x": 5}).accepted is accepted


def test_range_reason_uses_operator():
    schema = _schema({"x": {"bsonType": "double", "minimum": 0, "exclusiveMinimum": True}})
    violation = validate(schema, {"x": -1.5}).violations[0]
    assert violation.reason == "value -1.5 must be > 0"
    assert str(violation) == "x: value -1.5 must be > 0"


@pytest.mark.parametrize("value, actual", [
    (1, "int"),
    (True, "bool"),
    ("1.0", "string"),
    (None, "null"),
])
def test_double_rejects_other_types(value, actual):
    schema = _schema({"price": {"bsonType": "double"}})
    assert validate(schema, {"price": value}).violations == (TypeMismatch("price", "double", actual),)


def test_int_follows_bson_widths():
    schema = _schema({"n": {"bsonType": "int"}})
    assert validate(schema, {"n": 2 ** 31 - 1}).accepted
    assert validate(schema, {"n": 2 ** 31}).violations == (TypeMismatch("n", "int", "long"),)
    assert validate(schema, {"n": Int64(3)}).violations == (TypeMismatch("n", "int", "long"),)


def test_number_alias_accepts_every_numeric_type():
    schema = _schema({"n": {"bsonType": "number", "minimum": 0}})
    for value in (1, 2.5, Int64(7), Decimal128("3.25")):
        assert validate(schema, {"n": value}).accepted
    result = validate(schema, {"n": Decimal128("-1")})
    assert isinstance(result.violations[0], RangeViolation)


@pytest.mark.parametrize("value", [float("nan"), Decimal128("NaN"), Decimal128("-NaN"), Decimal128("sNaN")])
def test_nan_is_out_of_range(value):
    schema = _schema({"n": {"bsonType": "number", "minimum": 0, "maximum": 10}})
    violations = validate(schema, {"n": value}).violations
    assert [(type(v), v.path, v.keyword) for v in violations] == [
        (RangeViolation, "n", "minimum"),
        (RangeViolation, "n", "maximum"),
    ]


def test_nan_never_matches_enum():
    schema = _schema({"n": {"enum": [1.0, 2]}})
    assert not validate(schema, {"n": Decimal128("NaN")}).accepted
    assert not validate(schema, {"n": float("nan")}).accepted


def test_date_requires_datetime():
    schema = _schema({"d": {"bsonType": "date"}})
    assert validate(schema, {"d": datetime.datetime(2024, 1, 1)}).accepted
    assert validate(schema, {"d": datetime.date(2024, 1, 1)}).violations == (
        TypeMismatch("d", "date", "python:date"),
    )
    assert validate(schema, {"d": "2024-01-01"}).violations == (TypeMismatch("d", "date", "string"),)


def test_object_id_and_bool():
    schema = _schema({"ref": {"bsonType": "objectId"}, "flag": {"bsonType": "bool"}})
    assert validate(schema, {"ref": ObjectId(), "flag": False}).accepted
    result = validate(schema, {"ref": "abc", "flag": 0})
    assert [v.path for v in result.violations] == ["ref", "flag"]


def test_nullable_accepts_none_only_when_declared():
    schema = _schema({"a": {"bsonType": ["string", "null"], "minLength": 3}, "b": {"bsonType": "string"}})
    result = validate(schema, {"a": None, "b": None})
    assert result.violations == (TypeMismatch("b", "string", "null"),)


def test_string_length_counts_code_points():
    schema = _schema({"name": {"bsonType": "string", "minLength": 3, "maxLength": 4}})
    assert validate(schema, {"name": "ééé"}).accepted
    assert validate(schema, {"name": "é"}).violations == (LengthViolation("name", 3, 1, "minLength"),)
    assert validate(schema, {"name": "ééééé"}).violations == (LengthViolation("name", 4, 5, "maxLength"),)


def test_pattern_is_full_match():
    schema = _schema({"code": {"bsonType": "string", "pattern": "[A-Z]{3}"}})
    assert validate(schema, {"code": "ABC"}).accepted
    assert validate(schema, {"code": "ABCD"}).violations == (PatternViolation("code", "[A-Z]{3}", "ABCD"),)


def test_anchored_pattern_rejects_trailing_newline():
    schema = _schema({"code": {"bsonType": "string", "pattern": "^[A-Z]{3}$"}})
    assert not validate(schema, {"code": "ABC\n"}).accepted


def test_enum_is_case_sensitive_and_type_aware():
    schema = _schema({
        "status": {"bsonType": "string", "enum": ["pending", "shipped"]},
        "level": {"enum": [1, 2]},
    })
    assert validate(schema, {"status": "pending", "level": 2}).accepted
    result = validate(schema, {"status": "Pending", "level": True})
    assert result.violations == (
        EnumViolation("status", ("pending", "shipped"), "Pending"),
        EnumViolation("level", (1, 2), True),
    )


def test_type_mismatch_skips_type_specific_constraints():
    schema = _schema({"name": {"bsonType": "string", "minLength": 3, "enum": ["abc"]}})
    assert validate(schema, {"name": 5}).violations == (TypeMismatch("name", "string", "int"),)


def test_array_arity_and_item_paths():
    schema = _schema({
        "items": {
            "bsonType": "array",
            "minItems": 1,
            "maxItems": 2,
            "items": {
                "bsonType": "object",
                "required": ["qty"],
                "properties": {"qty": {"bsonType": "int", "minimum": 1}},
            },
        },
    })
    assert validate(schema, {"items": []}).violations == (ArityViolation("items", 1, 0, "minItems"),)

    result = validate(schema, {"items": [{"qty": 1}, {"qty": 0}, {}]})
    assert result.violations == (
        ArityViolation("items", 2, 3, "maxItems"),
        RangeViolation("items.1.qty", 1, 0, "minimum", False),
        MissingRequiredField("items.2.qty"),
    )


def test_array_of_scalars():
    schema = _schema({"tags": {"bsonType": "array", "items": {"bsonType": "string"}}})
    assert validate(schema, {"tags": ["a", 1]}).violations == (TypeMismatch("tags.1", "string", "int"),)


def test_nested_object_paths():
    schema = _schema({
        "address": {
            "bsonType": "object",
            "required": ["city"],
            "properties": {"city": {"bsonType": "string"}, "zip": {"bsonType": "string"}},
        },
    })
    result = validate(schema, {"address": {"zip": 12345}})
    assert result.violations == (
        MissingRequiredField("address.city"),
        TypeMismatch("address.zip", "string", "int"),
    )


def test_reports_one_violation_per_missing_required_field():
    schema = _schema(
        {"a": {"bsonType": "string"}, "b": {"bsonType": "string"}, "c": {"bsonType": "string"}},
        required=["a", "b", "c"],
    )
    result = validate(schema, {"b": "present"})
    assert result.violations == (MissingRequiredField("a"), MissingRequiredField("c"))


def test_violation_order_follows_document_traversal():
    schema = _schema(
        {
            "a": {"bsonType": "string"},
            "b": {"bsonType": "int", "minimum": 0},
            "c": {"bsonType": "string", "enum": ["x"]},
            "r": {"bsonType": "string"},
        },
        required=["r"],
    )
    result = validate(schema, {"c": "y", "b": -1, "a": 1})
    assert [type(v) for v in result.violations] == [
        MissingRequiredField, EnumViolation, RangeViolation, TypeMismatch,
    ]
    assert [v.path for v in result.violations] == ["r", "c", "b", "a"]


class TestStrictness:
    properties = {
        "name": {"bsonType": "string"},
        "meta": {"bsonType": "object", "properties": {"k": {"bsonType": "string"}}},
    }

    def test_permissive_ignores_unknown_fields(self):
        schema = _schema(self.properties)
        assert validate(schema, {"name": "x", "extra": 1, "meta": {"other": 2}}).accepted

    def test_strict_level_rejects_unknown_fields_at_every_level(self):
        schema = _schema(self.properties, level="strict")
        result = validate(schema, {"name": "x", "extra": 1, "meta": {"other": 2}})
        assert result.violations == (
            UnknownFieldViolation("extra"),
            UnknownFieldViolation("meta.other"),
        )

    def test_top_level_id_is_always_allowed(self):
        schema = _schema(self.properties, level="strict")
        assert validate(schema, {"_id": ObjectId(), "name": "x"}).accepted

    def test_additional_properties_false_closes_one_object(self):
        schema = _schema(self.properties, additionalProperties=False)
        result = validate(schema, {"extra": 1, "meta": {"other": 2}})
        assert result.violations == (UnknownFieldViolation("extra"),)

    def test_validator_override(self):
        strict_schema = _schema(self.properties, level="strict")
        permissive_schema = _schema(self.properties)
        assert SchemaValidator(strict=False).validate(strict_schema, {"extra": 1}).accepted
        assert not SchemaValidator(strict=True).validate(permissive_schema, {"extra": 1}).accepted
        assert SchemaValidator().is_strict(strict_schema) is True


@pytest.mark.parametrize("document, actual", [
    (None, "null"),
    (["a"], "array"),
    ("text", "string"),
])
def test_non_mapping_document_is_a_violation(document, actual):
    schema = _schema({})
    assert validate(schema, document).violations == (TypeMismatch("$", "object", actual),)


def test_validation_is_idempotent():
    schema = _schema({"x": {"bsonType": "int", "minimum": 10}}, required=["x"])
    document = {"x": 3, "y": "z"}
    assert validate(schema, document) == validate(schema, document)
    assert document == {"x": 3, "y": "z"}


def test_shared_schema_across_threads():
    schema = _schema({"x": {"bsonType": "int", "minimum": 0}}, required=["x"])
    documents = [{"x": i - 50} for i in range(100)]
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda d: validate(schema, d), documents))
    assert [r.accepted for r in results] == [d["x"] >= 0 for d in documents]


def test_result_to_dict():
    schema = _schema({"x": {"bsonType": "int"}}, required=["x"])
    assert validate(schema, {"x": 1}).to_dict() == {"accepted": True, "status": "accepted", "violations": []}
    data = validate(schema, {}).to_dict()
    assert data["status"] == "rejected"
    assert data["violations"] == [{"path": "x", "rule": "required", "reason": "required field is missing"}]
