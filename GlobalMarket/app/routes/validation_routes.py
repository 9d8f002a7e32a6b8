from bson import json_util
from bson.errors import BSONError
from flask import Blueprint, current_app, jsonify, request

from GlobalMarket.exceptions import UnknownCollectionError
from GlobalMarket.mongodb_database.collection_registry import COLLECTIONS, get_collection
from GlobalMarket.mongodb_database.schema_validation import SchemaValidator

# Create the Blueprint
validation_bp = Blueprint('validation', __name__)


def _validator():
    return SchemaValidator(strict=current_app.config.get('VALIDATOR_STRICT'))


@validation_bp.route('/collections', methods=['GET'])
def list_collections():
    validator = _validator()
    return jsonify({
        "collections": [
            {
                "name": spec.name,
                "required": list(spec.schema.required),
                "fields": list(spec.schema.properties),
                "strict": validator.is_strict(spec.schema),
                "validation_level": spec.validation_level,
            }
            for spec in COLLECTIONS.values()
        ]
    })


@validation_bp.route('/collections/<name>/validate', methods=['POST'])
def validate_collection_document(name):
    """
    Validate the request body against a collection schema.
    The body is parsed as MongoDB Extended JSON, so {"$date": ...} becomes a date.
    """
    try:
        spec = get_collection(name)
    except UnknownCollectionError as e:
        return jsonify({"error": str(e)}), 404

    raw = request.get_data(as_text=True)
    try:
        document = json_util.loads(raw)
    except (ValueError, TypeError, BSONError) as e:
        return jsonify({"error": f"Request body is not valid JSON: {e}"}), 400

    if not isinstance(document, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400

    result = _validator().validate(spec.schema, document)
    return jsonify({"collection": name, **result.to_dict()})
