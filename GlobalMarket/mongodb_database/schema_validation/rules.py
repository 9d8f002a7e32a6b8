"""
Compiled rule tree for a collection validator.

Each field of a `$jsonSchema` maps to one FieldRule variant that only carries
the constraints applicable to its BSON type. Rules are frozen and safe to
share between threads.
"""
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple


@dataclass(frozen=True)
class FieldRule:
    bson_type: Optional[str] = None
    enum: Optional[Tuple[Any, ...]] = None
    nullable: bool = False
    description: Optional[str] = None


@dataclass(frozen=True)
class AnyRule(FieldRule):
    """Field without a declared bsonType, e.g. an enum-only field."""


@dataclass(frozen=True)
class StringRule(FieldRule):
    bson_type: str = "string"
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[re.Pattern] = None


@dataclass(frozen=True)
class NumberRule(FieldRule):
    bson_type: str = "number"
    minimum: Any = None
    maximum: Any = None
    exclusive_minimum: bool = False
    exclusive_maximum: bool = False


@dataclass(frozen=True)
class BoolRule(FieldRule):
    bson_type: str = "bool"


@dataclass(frozen=True)
class DateRule(FieldRule):
    bson_type: str = "date"


@dataclass(frozen=True)
class ObjectIdRule(FieldRule):
    bson_type: str = "objectId"


@dataclass(frozen=True)
class ArrayRule(FieldRule):
    bson_type: str = "array"
    min_items: Optional[int] = None
    max_items: Optional[int] = None
    items: Optional[FieldRule] = None


@dataclass(frozen=True)
class ObjectRule(FieldRule):
    bson_type: str = "object"
    properties: Mapping[str, FieldRule] = field(
        default_factory=lambda: MappingProxyType({})
    )
    required: Tuple[str, ...] = ()
    additional_properties: bool = True


@dataclass(frozen=True)
class SchemaDefinition:
    """A named, read-only collection schema.

    ``strict`` rejects fields that the schema does not declare; it is set for
    collections declared with ``validationLevel: "strict"``.
    """

    name: str
    root: ObjectRule
    strict: bool = False
    validation_level: Optional[str] = None
    # Draft 4 documents fed to jsonschema, as declared and with every object closed
    json_schema: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)
    strict_json_schema: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def required(self) -> Tuple[str, ...]:
        return self.root.required

    @property
    def properties(self) -> Mapping[str, FieldRule]:
        return self.root.properties
