# COLLECTION: customers
# PURPOSE: Customer profiles, looked up by customer_id and email

from pymongo import ASCENDING, IndexModel

from GlobalMarket.mongodb_database.orders_db.orders_validator import address_schema

customers_validator = {
    "$jsonSchema": {
        "bsonType": "object",
        "required": ["customer_id", "customer_name", "email"],
        "properties": {
            "customer_id": {
                "bsonType": "string",
                "pattern": "^CUST-[A-Z0-9]{8}$",
                "description": "Format: CUST-XXXXXXXX"
            },
            "customer_name": {
                "bsonType": "string",
                "minLength": 2,
                "maxLength": 100,
                "description": "Customer name (2-100 characters)"
            },
            "email": {
                "bsonType": "string",
                "pattern": r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$",
                "description": "Valid email format"
            },
            "segment": {
                "bsonType": "string",
                "enum": ["Consumer", "Corporate", "Home Office"]
            },
            "phone": {
                "bsonType": "string",
                "pattern": r"^\+?[0-9\s\-\(\)]{10,}$",
                "description": "Valid phone number"
            },
            "registration_date": {
                "bsonType": "date",
                "description": "Registration date"
            },
            "address": address_schema,
            "total_spent": {
                "bsonType": "double",
                "minimum": 0,
                "description": "Total spent by the customer"
            },
            "order_count": {
                "bsonType": "int",
                "minimum": 0,
                "description": "Number of orders placed"
            },
            "is_active": {
                "bsonType": "bool",
                "description": "Active/inactive customer"
            }
        }
    }
}

customers_validation_level = None
customers_validation_action = None

customers_indexes = [
    IndexModel([("customer_id", ASCENDING)], unique=True),
    IndexModel([("email", ASCENDING)], unique=True),
    IndexModel([("segment", ASCENDING)]),
]
