"""
`$jsonSchema` as a jsonschema Draft 4 dialect.

MongoDB's `$jsonSchema` is Draft 4 plus ``bsonType``. The validator class
below adds that keyword and overrides the handful of Draft 4 keywords whose
behaviour has to follow BSON typing or report one error per field:

- ``required`` and ``additionalProperties`` yield one error per field, with
  the field name in the error path
- ``minimum``/``maximum`` compare Decimal128 values and fail on NaN, which
  MongoDB orders below every number
- ``pattern`` is a full match
- ``enum`` does not confuse ``True`` with ``1``
"""
import re
from collections.abc import Mapping

from jsonschema import Draft4Validator, validators
from jsonschema.exceptions import ValidationError

from GlobalMarket.mongodb_database.schema_validation.bson_types import (
    NUMERIC_TYPES,
    bson_type_name,
    is_nan,
    matches_bson_type,
    numeric_value,
    same_value,
)


def _declared_types(schema):
    declared = schema.get("bsonType")
    if declared is None:
        return []
    return [declared] if isinstance(declared, str) else list(declared)


def _is_null_allowed(instance, schema):
    return instance is None and "null" in _declared_types(schema)


def bson_type(validator, declared, instance, schema):
    types = [declared] if isinstance(declared, str) else declared
    if not any(matches_bson_type(instance, t) for t in types):
        yield ValidationError(f"{instance!r} is not of BSON type {declared!r}")


def required(validator, names, instance, schema):
    if not validator.is_type(instance, "object"):
        return
    for name in names:
        if name not in instance:
            yield ValidationError(f"{name!r} is a required property", path=(name,))


def additional_properties(validator, allowed, instance, schema):
    if allowed is not False or not validator.is_type(instance, "object"):
        return
    declared = schema.get("properties", {})
    for name in instance:
        if name not in declared:
            yield ValidationError(f"{name!r} is not declared in the schema", path=(name,))


def _bound(keyword, exclusive_keyword, failed):
    def check(validator, bound, instance, schema):
        if not validator.is_type(instance, "number"):
            return
        number = numeric_value(instance)
        if is_nan(number) or failed(number, bound, schema.get(exclusive_keyword, False)):
            yield ValidationError(f"{instance!r} is out of range for {keyword} {bound!r}")

    return check


minimum = _bound(
    "minimum", "exclusiveMinimum",
    lambda number, bound, exclusive: number <= bound if exclusive else number < bound,
)
maximum = _bound(
    "maximum", "exclusiveMaximum",
    lambda number, bound, exclusive: number >= bound if exclusive else number > bound,
)


def pattern(validator, regex, instance, schema):
    if validator.is_type(instance, "string") and re.fullmatch(regex, instance) is None:
        yield ValidationError(f"{instance!r} does not match {regex!r}")


def enum(validator, allowed, instance, schema):
    if _is_null_allowed(instance, schema):
        return
    if not any(same_value(instance, value) for value in allowed):
        yield ValidationError(f"{instance!r} is not one of {allowed!r}")


type_checker = Draft4Validator.TYPE_CHECKER.redefine_many({
    "number": lambda checker, instance: bson_type_name(instance) in NUMERIC_TYPES,
    "array": lambda checker, instance: isinstance(instance, (list, tuple)),
    "object": lambda checker, instance: isinstance(instance, Mapping),
})

BsonSchemaValidator = validators.extend(
    Draft4Validator,
    validators={
        "bsonType": bson_type,
        "required": required,
        "additionalProperties": additional_properties,
        "minimum": minimum,
        "maximum": maximum,
        "pattern": pattern,
        "enum": enum,
    },
    type_checker=type_checker,
)
