"""Journal entries JSON API."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from pydantic import ValidationError

from moodlog.core.ai.client import current_model_client
from moodlog.core.utils.validation import jsonable_errors
from moodlog.domains.journal.mappers import map_entry, map_page
from moodlog.domains.journal.schemas.journal_schemas import (
    JournalEntryCreate,
    JournalEntryListFilter,
    JournalEntryUpdate,
)
from moodlog.domains.journal.services import journal_service
from moodlog.domains.journal.services.query_composer import compose_query

journal_api_bp = Blueprint("journal_api", __name__)


def _validation_error(exc: ValidationError):
    return jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}), 400


@journal_api_bp.get("")
@jwt_required()
def list_entries():
    user_id = int(get_jwt_identity())
    try:
        filters = JournalEntryListFilter.model_validate(request.args.to_dict())
    except ValidationError as exc:
        return _validation_error(exc)
    query = compose_query(
        user_id,
        filters,
        default_limit=current_app.config.get("ENTRIES_DEFAULT_LIMIT", 8),
        max_limit=current_app.config.get("ENTRIES_MAX_LIMIT", 100),
    )
    page = journal_service.list_entries(query)
    return jsonify(map_page(page))


@journal_api_bp.post("")
@jwt_required()
def create_entry():
    payload = request.get_json(silent=True) or {}
    try:
        data = JournalEntryCreate.model_validate(payload)
    except ValidationError as exc:
        return _validation_error(exc)
    user_id = int(get_jwt_identity())
    try:
        entry = journal_service.ingest_entry(user_id, data.text, current_model_client())
    except ValueError:
        return jsonify({"ok": False, "error": "validation_error", "message": "Text is required"}), 400
    return jsonify(map_entry(entry)), 201


@journal_api_bp.get("/<string:entry_id>")
@jwt_required()
def get_entry(entry_id: str):
    entry = journal_service.get_owned_entry(entry_id, int(get_jwt_identity()))
    return jsonify(map_entry(entry))


@journal_api_bp.put("/<string:entry_id>")
@jwt_required()
def update_entry(entry_id: str):
    payload = request.get_json(silent=True) or {}
    try:
        data = JournalEntryUpdate.model_validate(payload)
    except ValidationError as exc:
        return _validation_error(exc)
    reannotate = current_model_client() if current_app.config.get("REANNOTATE_ON_EDIT") else None
    entry = journal_service.update_entry(
        entry_id,
        int(get_jwt_identity()),
        data.model_dump(exclude_unset=True, exclude_none=True),
        reannotate_with=reannotate,
    )
    return jsonify(map_entry(entry))


@journal_api_bp.delete("/<string:entry_id>")
@jwt_required()
def delete_entry(entry_id: str):
    journal_service.delete_entry(entry_id, int(get_jwt_identity()))
    return jsonify({"message": "Entry removed"})
