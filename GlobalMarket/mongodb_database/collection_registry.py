"""
The GlobalMarket collections, their validators and indexes.

Schemas are compiled once at import; a broken validator fails here with a
SchemaDefinitionError rather than on the first validation.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pymongo import IndexModel

from GlobalMarket.exceptions import UnknownCollectionError
from GlobalMarket.mongodb_database.customers_db.customers_validator import (
    customers_indexes,
    customers_validation_action,
    customers_validation_level,
    customers_validator,
)
from GlobalMarket.mongodb_database.orders_db.orders_validator import (
    orders_indexes,
    orders_validation_action,
    orders_validation_level,
    orders_validator,
)
from GlobalMarket.mongodb_database.products_db.products_validator import (
    products_indexes,
    products_validation_action,
    products_validation_level,
    products_validator,
)
from GlobalMarket.mongodb_database.reviews_db.reviews_validator import (
    reviews_indexes,
    reviews_validation_action,
    reviews_validation_level,
    reviews_validator,
)
from GlobalMarket.mongodb_database.schema_validation import SchemaDefinition, load_schema


@dataclass(frozen=True)
class CollectionSpec:
    name: str
    validator: Dict[str, Any]
    validation_level: Optional[str] = None
    validation_action: Optional[str] = None
    indexes: List[IndexModel] = field(default_factory=list)
    schema: SchemaDefinition = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        schema = load_schema(self.name, self.validator, self.validation_level)
        object.__setattr__(self, "schema", schema)


COLLECTIONS: Dict[str, CollectionSpec] = {
    spec.name: spec
    for spec in (
        CollectionSpec(
            "products",
            products_validator,
            products_validation_level,
            products_validation_action,
            products_indexes,
        ),
        CollectionSpec(
            "orders",
            orders_validator,
            orders_validation_level,
            orders_validation_action,
            orders_indexes,
        ),
        CollectionSpec(
            "customers",
            customers_validator,
            customers_validation_level,
            customers_validation_action,
            customers_indexes,
        ),
        CollectionSpec(
            "reviews",
            reviews_validator,
            reviews_validation_level,
            reviews_validation_action,
            reviews_indexes,
        ),
    )
}


def get_collection(name: str) -> CollectionSpec:
    try:
        return COLLECTIONS[name]
    except KeyError:
        raise UnknownCollectionError(name) from None


def get_schema(name: str) -> SchemaDefinition:
    return get_collection(name).schema
