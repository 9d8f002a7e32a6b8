"""CLI entry point for validating GlobalMarket documents and applying validators."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from bson import json_util
from bson.errors import BSONError
from pymongo.errors import PyMongoError

from GlobalMarket.app.config import Config
from GlobalMarket.exceptions import GlobalMarketError, UnknownCollectionError
from GlobalMarket.mongodb_database.collection_registry import COLLECTIONS, get_collection
from GlobalMarket.mongodb_database.schema_validation import SchemaValidator
from GlobalMarket.validation_report import run_validation_examples, validate_document

logger = logging.getLogger(__name__)

BANNER = "=" * 40


def configure_logging(verbose=False):
    # Reports go to stdout, log records to stderr
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,
    )


def load_documents(path: Path) -> List[dict]:
    """Read one document or an array of documents from a (Extended) JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json_util.loads(f.read())
    return data if isinstance(data, list) else [data]


def cmd_list(args, validator) -> int:
    print(BANNER)
    print("GLOBALMARKET COLLECTIONS")
    print(BANNER)
    for index, spec in enumerate(COLLECTIONS.values(), start=1):
        mode = "strict" if validator.is_strict(spec.schema) else "permissive"
        print(f"{index}. {spec.name} ({mode}) required: {', '.join(spec.schema.required)}")
    return 0


def cmd_examples(args, validator) -> int:
    outcomes = run_validation_examples(validator)
    rejected = sum(1 for _, accepted in outcomes if not accepted)
    print(f"\n{len(outcomes) - rejected} accepted, {rejected} rejected")
    return 0


def cmd_check(args, validator) -> int:
    get_collection(args.collection)
    documents = load_documents(Path(args.file))
    logger.debug("Loaded %d document(s) from %s", len(documents), args.file)
    accepted = [validate_document(args.collection, document, validator) for document in documents]
    return 0 if all(accepted) else 1


def cmd_apply(args, validator) -> int:
    # Imported here so the other commands work without a reachable server
    from GlobalMarket.mongodb_database.collection_setup import apply_all
    from GlobalMarket.mongodb_database.connection import get_database

    names = args.collection or None
    for name in names or []:
        get_collection(name)

    db = get_database()
    results = apply_all(db, names)
    print(BANNER)
    print(f"Collections with validation in '{Config.MONGO_DB_NAME}':")
    for index, (name, outcome) in enumerate(results.items(), start=1):
        print(f"{index}. {name} ✓ ({outcome})")
    print(BANNER)
    print("Indexes created for optimisation")
    print(BANNER)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="globalmarket-validate",
        description="Validate documents against the GlobalMarket collection schemas",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--strict",
        dest="strict",
        action="store_true",
        default=None,
        help="Reject undeclared fields for every collection",
    )
    mode.add_argument(
        "--permissive",
        dest="strict",
        action="store_false",
        default=None,
        help="Ignore undeclared fields for every collection",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List registered collections").set_defaults(func=cmd_list)
    subparsers.add_parser("examples", help="Validate the built-in example documents").set_defaults(
        func=cmd_examples
    )

    check = subparsers.add_parser("check", help="Validate documents from a JSON file")
    check.add_argument("collection", help="Collection name")
    check.add_argument("file", help="JSON or Extended JSON file with a document or an array")
    check.set_defaults(func=cmd_check)

    apply = subparsers.add_parser("apply", help="Apply validators and indexes to MongoDB")
    apply.add_argument(
        "--collection",
        action="append",
        help="Only apply this collection (repeatable)",
    )
    apply.set_defaults(func=cmd_apply)
    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose)

    strict = args.strict if args.strict is not None else Config.VALIDATOR_STRICT
    validator = SchemaValidator(strict=strict)

    try:
        return args.func(args, validator)
    except UnknownCollectionError as e:
        print(f"✗ {e}. Known collections: {', '.join(COLLECTIONS)}", file=sys.stderr)
        return 1
    except (OSError, ValueError, BSONError) as e:
        print(f"✗ Could not read documents: {e}", file=sys.stderr)
        return 1
    except PyMongoError as e:
        print(f"✗ Failed to apply validators to MongoDB: {e}", file=sys.stderr)
        return 1
    except GlobalMarketError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
