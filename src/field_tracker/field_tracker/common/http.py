"""JSON plumbing shared by the controllers: body parsing, envelopes, error mapping."""
from __future__ import annotations

import logging
from typing import Any, Optional, Type, TypeVar

import pydantic
from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    ConflictError,
    DomainError,
    NotFoundError,
    RepositoryError,
    ValidationError,
)

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Something went wrong on the server"

_STATUS_BY_ERROR: dict[type, int] = {
    ValidationError: 400,
    AuthenticationError: 401,
    NotFoundError: 404,
    ConflictError: 409,
    RepositoryError: 500,
}

M = TypeVar("M", bound=pydantic.BaseModel)


def _describe(error: pydantic.ValidationError) -> str:
    first = error.errors()[0]
    field = ".".join(str(p) for p in first.get("loc", ())) or "body"
    return f"{field}: {first.get('msg', 'invalid value')}"


def parse_json_body(model: Type[M]) -> M:
    """Validate the request body once, before anything reaches a service."""

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        raise ValidationError(_describe(e)) from e


def success(data: Any = None, *, message: Optional[str] = None, status: int = 200):
    body: dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return jsonify(body), status


def failure(message: str, status: int, **extra: Any):
    return jsonify({"success": False, "message": message, **extra}), status


def status_for(error: DomainError) -> int:
    for cls in type(error).__mro__:
        if cls in _STATUS_BY_ERROR:
            return _STATUS_BY_ERROR[cls]
    return 500


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        status = status_for(e)
        if status >= 500:
            logger.error("%s on %s %s", type(e).__name__, request.method, request.path, exc_info=e)
            return failure(GENERIC_SERVER_ERROR, status)
        if isinstance(e, ConflictError):
            logger.info("Conflict on %s %s: %s", request.method, request.path, e)
        return failure(str(e), status)

    @app.errorhandler(404)
    def handle_not_found(_e):
        return failure("API endpoint not found", 404, path=request.path)

    @app.errorhandler(405)
    def handle_method_not_allowed(_e):
        return failure("Method not allowed", 405, path=request.path)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return failure(e.description or e.name, e.code or 500)
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return failure(GENERIC_SERVER_ERROR, 500)
