"""
Tests for applying validators and indexes to MongoDB.

Uses the mock_db fixture instead of a live server.
"""

from unittest.mock import patch

from GlobalMarket.mongodb_database.collection_registry import get_collection
from GlobalMarket.mongodb_database.collection_setup import apply_all, apply_collection, validator_options
from GlobalMarket.mongodb_database.customers_db.customers_validator import customers_validator
from GlobalMarket.mongodb_database.products_db.products_validator import (
    products_indexes,
    products_validator,
)


def test_validator_options_include_level_only_when_declared():
    assert validator_options(get_collection("products")) == {
        "validator": products_validator,
        "validationLevel": "strict",
        "validationAction": "error",
    }
    assert validator_options(get_collection("customers")) == {"validator": customers_validator}


def test_existing_collection_is_modified(mock_db):
    mock_db.list_collection_names.return_value = ["products"]

    outcome = apply_collection(mock_db, get_collection("products"))

    assert outcome == "modified"
    mock_db.command.assert_called_once_with(
        "collMod",
        "products",
        validator=products_validator,
        validationLevel="strict",
        validationAction="error",
    )
    mock_db.create_collection.assert_not_called()
    mock_db.__getitem__.assert_called_with("products")
    mock_db.__getitem__.return_value.create_indexes.assert_called_once_with(products_indexes)


def test_missing_collection_is_created(mock_db):
    outcome = apply_collection(mock_db, get_collection("customers"))

    assert outcome == "created"
    mock_db.create_collection.assert_called_once_with("customers", validator=customers_validator)
    mock_db.command.assert_not_called()


def test_apply_all_in_registry_order(mock_db):
    mock_db.list_collection_names.return_value = ["orders"]

    results = apply_all(mock_db)

    assert results == {
        "products": "created",
        "orders": "modified",
        "customers": "created",
        "reviews": "created",
    }
    assert mock_db.__getitem__.return_value.create_indexes.call_count == 4


def test_apply_all_subset(mock_db):
    assert apply_all(mock_db, ["reviews"]) == {"reviews": "created"}
    mock_db.create_collection.assert_called_once()


def test_passing_script_applies_single_collection(mock_db, capsys):
    from GlobalMarket.mongodb_database.orders_db import passing_orders_validator

    mock_db.list_collection_names.return_value = ["orders"]
    with patch.object(passing_orders_validator, "get_database", return_value=mock_db):
        passing_orders_validator.main()

    mock_db.command.assert_called_once()
    assert mock_db.command.call_args.args == ("collMod", "orders")
    assert "Validator applied to existing collection 'orders'!" in capsys.readouterr().out
