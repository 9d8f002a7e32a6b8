"""Human readable pass/fail reporting for document validation."""
import datetime

from GlobalMarket.mongodb_database.collection_registry import get_schema
from GlobalMarket.mongodb_database.schema_validation import SchemaValidator

# Manual examples: (collection, label, document)
EXAMPLE_DOCUMENTS = [
    ("products", "Valid product", {
        "product_id": "PROD-001",
        "product_name": "Laptop Gaming",
        "category": "Technology",
        "price": 999.99,
        "stock_quantity": 50,
    }),
    ("products", "Invalid product (negative price)", {
        "product_id": "PROD-002",
        "product_name": "Mouse",
        "category": "Technology",
        "price": -10.99,
    }),
    ("customers", "Valid customer", {
        "customer_id": "CUST-0000001A",
        "customer_name": "Juan Pérez",
        "email": "juan@example.com",
        "segment": "Consumer",
    }),
    ("customers", "Invalid customer (malformed email)", {
        "customer_id": "CUST-0000002B",
        "customer_name": "Ana López",
        "email": "ana@example",
        "segment": "Corporate",
    }),
    ("orders", "Valid order", {
        "order_id": "ORD-20240115-A1B2C3",
        "customer_id": "CUST-0000001A",
        "order_date": datetime.datetime(2024, 1, 15, 10, 30),
        "status": "pending",
        "items": [
            {"product_id": "PROD-001", "quantity": 1, "unit_price": 999.99},
        ],
    }),
    ("orders", "Invalid order (no items)", {
        "order_id": "ORD-20240115-D4E5F6",
        "customer_id": "CUST-0000001A",
        "order_date": datetime.datetime(2024, 1, 15, 11, 0),
        "status": "pending",
        "items": [],
    }),
]


def format_result(collection_name, result):
    """Return the report lines for one validation result."""
    if result.accepted:
        return [f"✓ Document valid for {collection_name}"]
    lines = [f"✗ Validation failed for {collection_name}: {len(result.violations)} violation(s)"]
    lines.extend(f"    - {violation}" for violation in result.violations)
    return lines


def validate_document(collection_name, document, validator=None):
    """Validate a document against a registered collection and print the outcome.

    Returns True when the document is accepted.
    """
    validator = validator or SchemaValidator()
    result = validator.validate(get_schema(collection_name), document)
    for line in format_result(collection_name, result):
        print(line)
    return result.accepted


def run_validation_examples(validator=None):
    """Validate the built-in example documents, printing one report per document."""
    print("=== TESTING VALIDATION EXAMPLES ===")
    outcomes = []
    for collection_name, label, document in EXAMPLE_DOCUMENTS:
        print(f"\n{label}:")
        outcomes.append((label, validate_document(collection_name, document, validator)))
    return outcomes
