"""Pact blueprint for listing, adding and removing contacts."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required

from models import db
from services.pact_service import PactService
from utils.request_validation import parse_json_request, string_field

pact_bp = Blueprint("pact", __name__)


def _serialize(entries) -> list[dict]:
    return [entry.to_dict() for entry in entries]


@pact_bp.route("", methods=["GET"])
@jwt_required()
def get_pact():
    """Return the caller's pact."""

    entries = PactService(db.session).get_pact(get_jwt_identity())
    return jsonify({"pact": _serialize(entries)})


@pact_bp.route("", methods=["POST"])
@jwt_required()
def add_to_pact():
    """Add the user with the given email to the caller's pact."""

    payload = parse_json_request(request, allow_empty=True)
    target, entries = PactService(db.session).add_to_pact(
        get_jwt_identity(), string_field(payload, "email")
    )
    return jsonify({"user_added_id": target.id, "pact": _serialize(entries)})


@pact_bp.route("", methods=["DELETE"])
@jwt_required()
def remove_from_pact():
    """Remove the user with the given email from the caller's pact."""

    payload = parse_json_request(request, allow_empty=True)
    PactService(db.session).remove_from_pact(
        get_jwt_identity(), string_field(payload, "email")
    )
    return jsonify({"message": "User removed from pact."})
