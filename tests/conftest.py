"""
Pytest configuration for GlobalMarket validation tests.

Sets up test environment and global fixtures. No live MongoDB is needed:
database access goes through MagicMock.
"""
import os
import pytest
from unittest.mock import MagicMock

# Test environment variables, set before GlobalMarket.app.config is imported
os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")
os.environ.setdefault("MONGO_DB_NAME", "globalmarket_test")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.pop("VALIDATOR_STRICT", None)


@pytest.fixture
def mock_db():
    """
    Mock pymongo Database.
    Starts with no collections; tests set list_collection_names as needed.
    """
    db = MagicMock()
    db.list_collection_names.return_value = []
    db.__getitem__.return_value.create_indexes.return_value = ["index_1"]
    return db


@pytest.fixture
def app():
    from GlobalMarket.app import create_app

    app = create_app()
    app.config.update(TESTING=True, VALIDATOR_STRICT=None)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def valid_product():
    return {
        "product_id": "PROD-001",
        "product_name": "Laptop Gaming",
        "category": "Technology",
        "price": 999.99,
        "stock_quantity": 50,
    }


@pytest.fixture
def valid_order():
    import datetime

    return {
        "order_id": "ORD-20240115-A1B2C3",
        "customer_id": "CUST-0000001A",
        "order_date": datetime.datetime(2024, 1, 15, 10, 30),
        "status": "pending",
        "items": [
            {"product_id": "PROD-001", "quantity": 2, "unit_price": 19.99},
        ],
    }


@pytest.fixture
def valid_customer():
    return {
        "customer_id": "CUST-0000001A",
        "customer_name": "Juan Pérez",
        "email": "juan@example.com",
        "segment": "Consumer",
    }
