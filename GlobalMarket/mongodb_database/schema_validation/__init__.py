from GlobalMarket.exceptions import SchemaDefinitionError
from GlobalMarket.mongodb_database.schema_validation.loader import load_schema
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
from GlobalMarket.mongodb_database.schema_validation.validator import SchemaValidator, validate
from GlobalMarket.mongodb_database.schema_validation.violations import (
    ArityViolation,
    EnumViolation,
    LengthViolation,
    MissingRequiredField,
    PatternViolation,
    RangeViolation,
    TypeMismatch,
    UnknownFieldViolation,
    ValidationResult,
    Violation,
)

__all__ = [
    "AnyRule",
    "ArityViolation",
    "ArrayRule",
    "BoolRule",
    "DateRule",
    "EnumViolation",
    "FieldRule",
    "LengthViolation",
    "MissingRequiredField",
    "NumberRule",
    "ObjectIdRule",
    "ObjectRule",
    "PatternViolation",
    "RangeViolation",
    "SchemaDefinition",
    "SchemaDefinitionError",
    "SchemaValidator",
    "StringRule",
    "TypeMismatch",
    "UnknownFieldViolation",
    "ValidationResult",
    "Violation",
    "load_schema",
    "validate",
]
