# COLLECTION: reviews
# PURPOSE: Product reviews, referenced from products and customers by ID

from pymongo import ASCENDING, DESCENDING, IndexModel

reviews_validator = {
    "$jsonSchema": {
        "bsonType": "object",
        "required": ["review_id", "product_id", "customer_id", "rating", "review_date"],
        "properties": {
            "review_id": {
                "bsonType": "string",
                "description": "Unique review ID"
            },
            "product_id": {
                "bsonType": "string",
                "description": "Reference to the product"
            },
            "customer_id": {
                "bsonType": "string",
                "description": "Reference to the customer"
            },
            "rating": {
                "bsonType": "int",
                "minimum": 1,
                "maximum": 5,
                "description": "Rating from 1 to 5 stars"
            },
            "title": {
                "bsonType": "string",
                "maxLength": 200,
                "description": "Review title"
            },
            "comment": {
                "bsonType": "string",
                "maxLength": 2000,
                "description": "Detailed comment"
            },
            "review_date": {
                "bsonType": "date",
                "description": "Review date"
            },
            "helpful_votes": {
                "bsonType": "int",
                "minimum": 0,
                "description": "Helpful votes"
            },
            "verified_purchase": {
                "bsonType": "bool",
                "description": "Verified purchase"
            }
        }
    }
}

reviews_validation_level = None
reviews_validation_action = None

reviews_indexes = [
    IndexModel([("review_id", ASCENDING)], unique=True),
    IndexModel([("product_id", ASCENDING), ("rating", DESCENDING)]),
    IndexModel([("customer_id", ASCENDING)]),
]
