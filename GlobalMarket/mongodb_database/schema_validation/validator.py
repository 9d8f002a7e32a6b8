"""
In-process validation of documents against a compiled collection schema.

jsonschema walks the `$jsonSchema` (see keywords.py) and yields every error;
each error is turned into a Violation with a MongoDB dot-notation path. The
checks mirror what MongoDB enforces at write time, but all violations are
reported instead of only the first one.
"""
import logging
from collections.abc import Mapping
from typing import Any, Optional

from GlobalMarket.mongodb_database.schema_validation.bson_types import bson_type_name
from GlobalMarket.mongodb_database.schema_validation.keywords import BsonSchemaValidator
from GlobalMarket.mongodb_database.schema_validation.rules import SchemaDefinition
from GlobalMarket.mongodb_database.schema_validation.violations import (
    ROOT_PATH,
    ArityViolation,
    EnumViolation,
    LengthViolation,
    MissingRequiredField,
    PatternViolation,
    RangeViolation,
    TypeMismatch,
    UnknownFieldViolation,
    ValidationResult,
)

logger = logging.getLogger(__name__)


def _type_mismatch(path, error):
    declared = error.validator_value
    types = [declared] if isinstance(declared, str) else [t for t in declared if t != "null"]
    return TypeMismatch(path, "|".join(types), bson_type_name(error.instance))


def _range(path, error):
    exclusive = error.schema.get(f"exclusive{error.validator.capitalize()}", False)
    return RangeViolation(path, error.validator_value, error.instance, error.validator, exclusive)


# jsonschema keyword -> Violation factory
VIOLATIONS = {
    "bsonType": _type_mismatch,
    "required": lambda path, error: MissingRequiredField(path),
    "additionalProperties": lambda path, error: UnknownFieldViolation(path),
    "minimum": _range,
    "maximum": _range,
    "minLength": lambda path, error: LengthViolation(
        path, error.validator_value, len(error.instance), error.validator
    ),
    "maxLength": lambda path, error: LengthViolation(
        path, error.validator_value, len(error.instance), error.validator
    ),
    "pattern": lambda path, error: PatternViolation(path, error.validator_value, error.instance),
    "enum": lambda path, error: EnumViolation(path, tuple(error.validator_value), error.instance),
    "minItems": lambda path, error: ArityViolation(
        path, error.validator_value, len(error.instance), error.validator
    ),
    "maxItems": lambda path, error: ArityViolation(
        path, error.validator_value, len(error.instance), error.validator
    ),
}


def _dotted(segments):
    return ".".join(str(s) for s in segments) if segments else ROOT_PATH


def _traversal_key(document, segments, missing):
    """Sort key placing a violation in document traversal order.

    Each path segment maps to its position in the document; a missing
    required field sorts before the fields present at its level.
    """
    key = []
    node = document
    for depth, segment in enumerate(segments):
        if isinstance(node, Mapping):
            keys = list(node.keys())
            if missing and depth == len(segments) - 1:
                position = -1
            else:
                position = keys.index(segment) if segment in keys else -1
            node = node.get(segment)
        elif isinstance(node, (list, tuple)) and isinstance(segment, int):
            position = segment
            node = node[segment] if segment < len(node) else None
        else:
            position = -1
        key.append(position)
    return tuple(key)


class SchemaValidator:
    """Validates documents against SchemaDefinition instances.

    ``strict`` overrides the per-schema setting when it is not None: True
    rejects undeclared fields for every schema, False ignores them for every
    schema. With the default (None) each schema decides.
    """

    def __init__(self, strict: Optional[bool] = None):
        self.strict = strict

    def is_strict(self, schema: SchemaDefinition) -> bool:
        return schema.strict if self.strict is None else self.strict

    def validate(self, schema: SchemaDefinition, document: Any) -> ValidationResult:
        json_schema = schema.strict_json_schema if self.is_strict(schema) else schema.json_schema
        errors = BsonSchemaValidator(json_schema).iter_errors(document)

        found = []
        mistyped = set()
        for error in errors:
            segments = tuple(error.absolute_path)
            violation = VIOLATIONS[error.validator](_dotted(segments), error)
            if isinstance(violation, TypeMismatch):
                mistyped.add(segments)
            key = _traversal_key(document, segments, isinstance(violation, MissingRequiredField))
            found.append((key, segments, violation))

        # Constraints only count once the value has the declared type
        kept = [
            (key, violation) for key, segments, violation in found
            if isinstance(violation, TypeMismatch) or segments not in mistyped
        ]
        # sort is stable, so errors on one path keep the keyword order
        kept.sort(key=lambda entry: entry[0])

        result = ValidationResult(tuple(violation for _, violation in kept))
        logger.debug(
            "Validated document against %s: %s (%d violations)",
            schema.name, result.status, len(result.violations),
        )
        return result


default_validator = SchemaValidator()


def validate(schema: SchemaDefinition, document: Any) -> ValidationResult:
    """Validate ``document`` against ``schema`` using per-schema strictness."""
    return default_validator.validate(schema, document)
