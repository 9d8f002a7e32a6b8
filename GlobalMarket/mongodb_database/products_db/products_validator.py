# COLLECTION: products
# PURPOSE: Product catalogue with embedded ratings, searched by category and price

from pymongo import ASCENDING, DESCENDING, IndexModel

products_validator = {
    "$jsonSchema": {
        "bsonType": "object",
        "required": ["product_id", "product_name", "category", "price"],
        "properties": {
            "product_id": {
                "bsonType": "string",
                "description": "Unique product ID (required)"
            },
            "product_name": {
                "bsonType": "string",
                "minLength": 3,
                "maxLength": 200,
                "description": "Product name (3-200 characters)"
            },
            "category": {
                "bsonType": "string",
                "enum": [
                    "Technology",
                    "Furniture",
                    "Office Supplies",
                    "Electronics",
                    "Home Appliances"
                ],
                "description": "Valid product category"
            },
            "sub_category": {
                "bsonType": "string",
                "description": "Product sub-category"
            },
            "price": {
                "bsonType": "double",
                "minimum": 0,
                "exclusiveMinimum": True,
                "description": "Price must be positive and greater than 0"
            },
            "stock_quantity": {
                "bsonType": "int",
                "minimum": 0,
                "description": "Stock on hand cannot be negative"
            },
            "description": {
                "bsonType": "string",
                "maxLength": 1000,
                "description": "Product description"
            },
            "ratings": {
                "bsonType": "array",
                "description": "Embedded ratings",
                "items": {
                    "bsonType": "object",
                    "required": ["user_id", "rating"],
                    "properties": {
                        "user_id": {
                            "bsonType": "string",
                            "description": "ID of the rating user"
                        },
                        "rating": {
                            "bsonType": "int",
                            "minimum": 1,
                            "maximum": 5,
                            "description": "Rating between 1 and 5 stars"
                        },
                        "comment": {
                            "bsonType": "string",
                            "maxLength": 500,
                            "description": "Optional comment"
                        },
                        "date": {
                            "bsonType": "date",
                            "description": "Date of the rating"
                        }
                    }
                }
            },
            "average_rating": {
                "bsonType": "double",
                "minimum": 0,
                "maximum": 5,
                "description": "Computed average rating"
            },
            "tags": {
                "bsonType": "array",
                "description": "Search tags",
                "items": {
                    "bsonType": "string"
                }
            },
            "created_at": {
                "bsonType": "date",
                "description": "Creation date"
            },
            "updated_at": {
                "bsonType": "date",
                "description": "Last update date"
            },
            "is_active": {
                "bsonType": "bool",
                "description": "Active/inactive product"
            }
        }
    }
}

products_validation_level = "strict"
products_validation_action = "error"

products_indexes = [
    IndexModel([("product_id", ASCENDING)], unique=True),
    IndexModel([("category", ASCENDING), ("sub_category", ASCENDING)]),
    IndexModel([("price", ASCENDING)]),
    IndexModel([("average_rating", DESCENDING)]),
]
