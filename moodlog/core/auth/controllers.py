"""Auth HTTP controllers (API only)."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from pydantic import ValidationError

from moodlog.core.auth.auth_service import (
    authenticate_user,
    get_user,
    issue_token,
    register_user,
)
from moodlog.core.auth.schemas import LoginRequest, RegisterRequest
from moodlog.core.users.schemas import serialize_user
from moodlog.core.utils.validation import jsonable_errors
from moodlog.extensions import limiter

auth_bp = Blueprint("auth_api", __name__)


@auth_bp.post("/register")
@limiter.limit("5/minute")
def register():
    payload = request.get_json(silent=True) or {}
    try:
        data = RegisterRequest.model_validate(payload)
    except ValidationError as exc:
        return (
            jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}),
            400,
        )
    try:
        user = register_user(data)
    except ValueError as exc:
        code = str(exc)
        if code == "email_already_exists":
            return jsonify({"ok": False, "error": code, "message": "User already exists"}), 400
        return jsonify({"ok": False, "error": "registration_failed"}), 400
    return jsonify(serialize_user(user, token=issue_token(user))), 201


@auth_bp.post("/login")
@limiter.limit("10/minute")
def login():
    payload = request.get_json(silent=True) or {}
    try:
        data = LoginRequest.model_validate(payload)
    except ValidationError as exc:
        return (
            jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}),
            400,
        )
    user = authenticate_user(data.email, data.password)
    if not user:
        return jsonify({"ok": False, "error": "invalid_credentials", "message": "Invalid email or password"}), 401
    return jsonify(serialize_user(user, token=issue_token(user)))


@auth_bp.get("/me")
@jwt_required()
def me():
    user = get_user(int(get_jwt_identity()))
    if not user:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify(serialize_user(user))
