"""
Apply collection validators and indexes to a MongoDB database.

Existing collections get their validator replaced with ``collMod``; missing
ones are created with it. Indexes are (re)created afterwards, which is a no-op
for indexes that already exist with the same options.
"""
import logging

from GlobalMarket.mongodb_database.collection_registry import COLLECTIONS

logger = logging.getLogger(__name__)


def validator_options(spec):
    """Keyword options shared by collMod and create_collection."""
    options = {"validator": spec.validator}
    if spec.validation_level is not None:
        options["validationLevel"] = spec.validation_level
    if spec.validation_action is not None:
        options["validationAction"] = spec.validation_action
    return options


def apply_collection(db, spec):
    """Apply one collection's validator and indexes. Returns "modified" or "created"."""
    options = validator_options(spec)

    # Check if collection exists
    if spec.name in db.list_collection_names():
        # Collection exists, modify it
        db.command("collMod", spec.name, **options)
        outcome = "modified"
    else:
        # Collection doesn't exist, create it with validator
        db.create_collection(spec.name, **options)
        outcome = "created"
    logger.info("Validator %s for collection %s", outcome, spec.name)

    if spec.indexes:
        names = db[spec.name].create_indexes(spec.indexes)
        logger.info("Indexes ensured on %s: %s", spec.name, ", ".join(names))
    return outcome


def apply_all(db, names=None):
    """Apply every registered collection, or only ``names``, in registry order."""
    results = {}
    for name, spec in COLLECTIONS.items():
        if names and name not in names:
            continue
        results[name] = apply_collection(db, spec)
    return results
