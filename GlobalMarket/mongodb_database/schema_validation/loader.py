"""Compile MongoDB `$jsonSchema` validator dicts into SchemaDefinition trees."""
import copy
import logging
import numbers
import re
from types import MappingProxyType
from typing import Any, Dict, Optional

from jsonschema.exceptions import SchemaError

from GlobalMarket.exceptions import SchemaDefinitionError
from GlobalMarket.mongodb_database.schema_validation.bson_types import (
    KNOWN_TYPES,
    NUMERIC_TYPES,
)
from GlobalMarket.mongodb_database.schema_validation.keywords import BsonSchemaValidator
from GlobalMarket.mongodb_database.schema_validation.rules import (
    AnyRule,
    ArrayRule,
    BoolRule,
    DateRule,
    FieldRule,
    NumberRule,
    ObjectIdRule,
    ObjectRule,
    SchemaDefinition,
    StringRule,
)

logger = logging.getLogger(__name__)

VALIDATION_LEVELS = ("strict", "moderate", "off")

COMMON_KEYWORDS = {"bsonType", "enum", "description", "title"}

# Keywords each rule type accepts on top of COMMON_KEYWORDS
TYPE_KEYWORDS = {
    "string": {"minLength", "maxLength", "pattern"},
    "number": {"minimum", "maximum", "exclusiveMinimum", "exclusiveMaximum"},
    "bool": set(),
    "date": set(),
    "objectId": set(),
    "array": {"minItems", "maxItems", "items"},
    "object": {"properties", "required", "additionalProperties"},
    None: set(),
}


def load_schema(name: str, validator: Dict[str, Any], validation_level: Optional[str] = None) -> SchemaDefinition:
    """Compile a collection validator into a SchemaDefinition.

    Args:
        name: Collection name the schema belongs to.
        validator: Either ``{"$jsonSchema": {...}}`` or the bare schema dict.
        validation_level: The collection's ``validationLevel``; ``"strict"``
            makes the schema reject undeclared fields.

    Raises:
        SchemaDefinitionError: If the validator is structurally invalid.
    """
    if not isinstance(validator, dict):
        raise SchemaDefinitionError(name, "validator must be a dict")
    schema = validator.get("$jsonSchema", validator)
    if not isinstance(schema, dict):
        raise SchemaDefinitionError(name, "$jsonSchema must be a dict")

    if validation_level is not None and validation_level not in VALIDATION_LEVELS:
        raise SchemaDefinitionError(
            name, f"validationLevel must be one of {list(VALIDATION_LEVELS)}, got {validation_level!r}"
        )

    root = compile_rule(schema, "")
    if not isinstance(root, ObjectRule) or root.nullable:
        raise SchemaDefinitionError(name, "top-level bsonType must be 'object'")

    json_schema = _allow_id(copy.deepcopy(schema))
    try:
        BsonSchemaValidator.check_schema(json_schema)
    except SchemaError as e:
        location = "/".join(str(p) for p in e.path)
        raise SchemaDefinitionError(name, f"{e.message} (at /{location})") from e

    definition = SchemaDefinition(
        name=name,
        root=root,
        strict=validation_level == "strict",
        validation_level=validation_level,
        json_schema=json_schema,
        strict_json_schema=_closed(copy.deepcopy(json_schema)),
    )
    logger.debug(
        "Loaded schema %s (%d fields, strict=%s)", name, len(root.properties), definition.strict
    )
    return definition


def compile_rule(schema: Dict[str, Any], path: str) -> FieldRule:
    """Compile one (possibly nested) `$jsonSchema` node found at ``path``."""
    where = path or "$"
    if not isinstance(schema, dict):
        raise SchemaDefinitionError(where, "schema node must be a dict")

    bson_type, nullable = _parse_bson_type(schema.get("bsonType"), where)
    kind = "number" if bson_type in NUMERIC_TYPES + ("number",) else bson_type

    allowed = COMMON_KEYWORDS | TYPE_KEYWORDS[kind]
    for keyword in schema:
        if keyword in allowed:
            continue
        owner = _keyword_owner(keyword)
        if owner is not None:
            raise SchemaDefinitionError(
                where, f"'{keyword}' only applies to {owner} fields, not '{bson_type or 'untyped'}'"
            )
        raise SchemaDefinitionError(where, f"unsupported keyword '{keyword}'")

    common = dict(
        enum=_parse_enum(schema, where),
        nullable=nullable,
        description=schema.get("description"),
    )

    if kind is None:
        return AnyRule(**common)
    if kind == "string":
        return StringRule(
            min_length=_non_negative_int(schema, "minLength", where),
            max_length=_non_negative_int(schema, "maxLength", where),
            pattern=_compile_pattern(schema.get("pattern"), where),
            **common,
        )
    if kind == "number":
        return _compile_number(schema, bson_type, where, common)
    if kind == "bool":
        return BoolRule(**common)
    if kind == "date":
        return DateRule(**common)
    if kind == "objectId":
        return ObjectIdRule(**common)
    if kind == "array":
        items = schema.get("items")
        return ArrayRule(
            min_items=_non_negative_int(schema, "minItems", where),
            max_items=_non_negative_int(schema, "maxItems", where),
            items=compile_rule(items, _join(path, "items")) if items is not None else None,
            **common,
        )
    return _compile_object(schema, path, common)


def _compile_number(schema, bson_type, where, common):
    bounds = {}
    for key in ("minimum", "maximum"):
        value = schema.get(key)
        if value is not None and (isinstance(value, bool) or not isinstance(value, numbers.Number)):
            raise SchemaDefinitionError(where, f"'{key}' must be a number")
        bounds[key] = value

    flags = {}
    for key, bound in (("exclusiveMinimum", "minimum"), ("exclusiveMaximum", "maximum")):
        value = schema.get(key, False)
        if not isinstance(value, bool):
            raise SchemaDefinitionError(where, f"'{key}' must be a boolean")
        if value and bounds[bound] is None:
            raise SchemaDefinitionError(where, f"'{key}' requires '{bound}'")
        flags[key] = value

    if (
        bounds["minimum"] is not None
        and bounds["maximum"] is not None
        and bounds["minimum"] > bounds["maximum"]
    ):
        raise SchemaDefinitionError(where, "'minimum' is greater than 'maximum'")

    return NumberRule(
        bson_type=bson_type,
        minimum=bounds["minimum"],
        maximum=bounds["maximum"],
        exclusive_minimum=flags["exclusiveMinimum"],
        exclusive_maximum=flags["exclusiveMaximum"],
        **common,
    )


def _compile_object(schema, path, common):
    where = path or "$"
    properties = schema.get("properties", {})
    if not isinstance(properties, dict):
        raise SchemaDefinitionError(where, "'properties' must be a dict")

    compiled = {}
    for field_name, field_schema in properties.items():
        compiled[field_name] = compile_rule(field_schema, _join(path, field_name))

    required = schema.get("required", [])
    if not isinstance(required, list) or not all(isinstance(r, str) for r in required):
        raise SchemaDefinitionError(where, "'required' must be a list of field names")
    if len(set(required)) != len(required):
        raise SchemaDefinitionError(where, "'required' lists a field more than once")
    undeclared = [r for r in required if r not in compiled]
    if undeclared:
        raise SchemaDefinitionError(where, f"required fields {undeclared} are not declared in 'properties'")

    additional = schema.get("additionalProperties", True)
    if not isinstance(additional, bool):
        raise SchemaDefinitionError(where, "'additionalProperties' must be a boolean")

    return ObjectRule(
        properties=MappingProxyType(compiled),
        required=tuple(required),
        additional_properties=additional,
        **common,
    )


def _parse_bson_type(declared, where):
    """Return ``(bson_type, nullable)`` for a ``bsonType`` value."""
    if declared is None:
        return None, False
    if isinstance(declared, str):
        types = [declared]
    elif isinstance(declared, list) and all(isinstance(t, str) for t in declared):
        types = list(declared)
    else:
        raise SchemaDefinitionError(where, "'bsonType' must be a string or a list of strings")

    nullable = "null" in types
    concrete = [t for t in types if t != "null"]
    if len(concrete) != 1:
        raise SchemaDefinitionError(
            where, f"'bsonType' must name exactly one type besides 'null', got {declared!r}"
        )
    bson_type = concrete[0]
    if bson_type not in KNOWN_TYPES:
        raise SchemaDefinitionError(where, f"unknown bsonType '{bson_type}'")
    return bson_type, nullable


def _parse_enum(schema, where):
    if "enum" not in schema:
        return None
    values = schema["enum"]
    if not isinstance(values, list) or not values:
        raise SchemaDefinitionError(where, "'enum' must be a non-empty list")
    return tuple(values)


def _non_negative_int(schema, key, where):
    value = schema.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise SchemaDefinitionError(where, f"'{key}' must be a non-negative integer")
    return value


def _compile_pattern(pattern, where):
    if pattern is None:
        return None
    if not isinstance(pattern, str):
        raise SchemaDefinitionError(where, "'pattern' must be a string")
    try:
        return re.compile(pattern)
    except re.error as e:
        raise SchemaDefinitionError(where, f"invalid pattern {pattern!r}: {e}") from e


def _keyword_owner(keyword):
    for kind, keywords in TYPE_KEYWORDS.items():
        if keyword in keywords:
            return kind
    return None


def _join(path, segment):
    return f"{path}.{segment}" if path else str(segment)


def _allow_id(schema):
    """Declare the top-level ``_id`` MongoDB adds on insert, if the schema doesn't."""
    properties = schema.setdefault("properties", {})
    properties.setdefault("_id", {})
    return schema


def _closed(schema):
    """Set ``additionalProperties: false`` on every object node, in place."""
    declared = schema.get("bsonType")
    types = [declared] if isinstance(declared, str) else declared or []
    if "object" in types:
        schema["additionalProperties"] = False
    for field_schema in schema.get("properties", {}).values():
        _closed(field_schema)
    if isinstance(schema.get("items"), dict):
        _closed(schema["items"])
    return schema
