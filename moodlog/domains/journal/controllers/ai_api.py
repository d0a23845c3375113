"""AI endpoints: standalone annotation and semantic search."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required
from pydantic import ValidationError

from moodlog.core.ai.client import current_model_client
from moodlog.core.utils.validation import jsonable_errors
from moodlog.domains.journal.schemas.journal_schemas import (
    AnalyzeRequest,
    SemanticSearchRequest,
)
from moodlog.domains.journal.services.annotation_service import annotate
from moodlog.domains.journal.services.search_service import SearchCandidate, semantic_match
from moodlog.extensions import limiter

ai_api_bp = Blueprint("ai_api", __name__)


@ai_api_bp.post("/analyze")
@limiter.limit("30/minute")
def analyze():
    payload = request.get_json(silent=True) or {}
    try:
        data = AnalyzeRequest.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}), 400
    outcome = annotate(data.text, current_model_client())
    return jsonify(outcome.value.to_dict())


@ai_api_bp.post("/search")
@jwt_required()
def search():
    payload = request.get_json(silent=True) or {}
    try:
        data = SemanticSearchRequest.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}), 400
    candidates = [SearchCandidate(id=e.id, text=e.text, tags=list(e.tags)) for e in data.entries]
    outcome = semantic_match(
        data.query,
        candidates,
        current_model_client(),
        prefix_chars=current_app.config.get("SEARCH_TEXT_PREFIX_CHARS", 200),
    )
    return jsonify(outcome.value)
