"""
Maps Python values to the BSON type names used by `$jsonSchema` validators.

Values are classified the way pymongo encodes them on insert, so a document
that passes here is stored with the BSON types the collection validator
expects.
"""
import datetime
import decimal
import math
from collections.abc import Mapping

from bson import Decimal128, Int64, ObjectId

INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1

# Aliases accepted in "bsonType"; "number" matches any numeric type.
NUMERIC_TYPES = ("int", "long", "double", "decimal")
SCALAR_TYPES = ("string", "bool", "date", "objectId")
CONTAINER_TYPES = ("array", "object")
KNOWN_TYPES = NUMERIC_TYPES + ("number",) + SCALAR_TYPES + CONTAINER_TYPES


def bson_type_name(value):
    """Return the BSON type name pymongo would store ``value`` as."""
    if value is None:
        return "null"
    # bool is checked before int since bool is an int subclass
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, Int64):
        return "long"
    if isinstance(value, int):
        return "int" if INT32_MIN <= value <= INT32_MAX else "long"
    if isinstance(value, float):
        return "double"
    if isinstance(value, (Decimal128, decimal.Decimal)):
        return "decimal"
    if isinstance(value, str):
        return "string"
    if isinstance(value, datetime.datetime):
        return "date"
    if isinstance(value, ObjectId):
        return "objectId"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, (bytes, bytearray)):
        return "binData"
    # not encodable by pymongo as-is (datetime.date, set, ...)
    return f"python:{type(value).__name__}"


def matches_bson_type(value, expected):
    """Check a value against a single ``bsonType`` alias."""
    actual = bson_type_name(value)
    if expected == "number":
        return actual in NUMERIC_TYPES
    return actual == expected


def numeric_value(value):
    """Convert a numeric document value into something comparable with bounds."""
    if isinstance(value, Decimal128):
        return value.to_decimal()
    return value


def is_nan(number):
    """True for float NaN and for quiet or signalling Decimal NaN."""
    if isinstance(number, float):
        return math.isnan(number)
    if isinstance(number, decimal.Decimal):
        return number.is_nan()
    return False


def same_value(left, right):
    """Equality that does not confuse ``True`` with ``1`` or ``"1"`` with ``1``."""
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if bson_type_name(left) in NUMERIC_TYPES and bson_type_name(right) in NUMERIC_TYPES:
        left, right = numeric_value(left), numeric_value(right)
        # NaN never equals anything and signalling NaN raises on ==
        if is_nan(left) or is_nan(right):
            return False
        return left == right
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        return (
            list(left.keys()) == list(right.keys())
            and all(same_value(left[key], right[key]) for key in left)
        )
    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        return len(left) == len(right) and all(
            same_value(a, b) for a, b in zip(left, right)
        )
    return type(left) is type(right) and left == right
