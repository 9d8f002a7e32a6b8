# COLLECTION: orders
# PURPOSE: Customer orders with embedded line items and shipping address

from pymongo import ASCENDING, DESCENDING, IndexModel

address_schema = {
    "bsonType": "object",
    "properties": {
        "street": {"bsonType": "string"},
        "city": {"bsonType": "string"},
        "state": {"bsonType": "string"},
        "country": {"bsonType": "string"},
        "postal_code": {"bsonType": "string"}
    }
}

orders_validator = {
    "$jsonSchema": {
        "bsonType": "object",
        "required": ["order_id", "customer_id", "order_date", "status", "items"],
        "properties": {
            "order_id": {
                "bsonType": "string",
                "pattern": "^ORD-[0-9]{8}-[A-Z0-9]{6}$",
                "description": "Format: ORD-YYYYMMDD-XXXXXX"
            },
            "customer_id": {
                "bsonType": "string",
                "description": "Reference to the customer"
            },
            "order_date": {
                "bsonType": "date",
                "description": "Order date"
            },
            "ship_date": {
                "bsonType": "date",
                "description": "Shipping date"
            },
            "status": {
                "bsonType": "string",
                "enum": ["pending", "processing", "shipped", "delivered", "cancelled"],
                "description": "Valid order status"
            },
            "total_amount": {
                "bsonType": "double",
                "minimum": 0,
                "description": "Non-negative order total"
            },
            "discount": {
                "bsonType": "double",
                "minimum": 0,
                "maximum": 100,
                "description": "Discount between 0-100%"
            },
            "shipping_cost": {
                "bsonType": "double",
                "minimum": 0,
                "description": "Non-negative shipping cost"
            },
            "items": {
                "bsonType": "array",
                "minItems": 1,
                "description": "Must contain at least one item",
                "items": {
                    "bsonType": "object",
                    "required": ["product_id", "quantity", "unit_price"],
                    "properties": {
                        "product_id": {
                            "bsonType": "string",
                            "description": "Product ID"
                        },
                        "product_name": {
                            "bsonType": "string",
                            "description": "Product name"
                        },
                        "quantity": {
                            "bsonType": "int",
                            "minimum": 1,
                            "maximum": 100,
                            "description": "Quantity between 1-100"
                        },
                        "unit_price": {
                            "bsonType": "double",
                            "minimum": 0,
                            "description": "Non-negative unit price"
                        },
                        "subtotal": {
                            "bsonType": "double",
                            "minimum": 0,
                            "description": "Computed subtotal"
                        }
                    }
                }
            },
            "shipping_address": address_schema,
            "payment_method": {
                "bsonType": "string",
                "enum": ["credit_card", "debit_card", "paypal", "bank_transfer", "cash"]
            },
            "priority": {
                "bsonType": "string",
                "enum": ["low", "medium", "high", "critical"]
            }
        }
    }
}

# validationLevel is not set, MongoDB defaults apply
orders_validation_level = None
orders_validation_action = None

orders_indexes = [
    IndexModel([("order_id", ASCENDING)], unique=True),
    IndexModel([("customer_id", ASCENDING)]),
    IndexModel([("order_date", DESCENDING)]),
    IndexModel([("status", ASCENDING)]),
    IndexModel([("total_amount", DESCENDING)]),
]
