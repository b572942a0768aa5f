"""Helpers shared by the route blueprints."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Type, TypeVar

from flask import current_app, jsonify, request
from pydantic import BaseModel, ValidationError

from src.models.dto import LedgerErrorCode, OperationResult

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=BaseModel)

ERROR_STATUS = {
    LedgerErrorCode.NOT_FOUND: 404,
    LedgerErrorCode.NOT_OWNER: 403,
    LedgerErrorCode.NOT_FOR_SALE: 409,
    LedgerErrorCode.SELF_PURCHASE: 400,
    LedgerErrorCode.INVALID_PRICE: 400,
}


class InvalidPayload(Exception):
    def __init__(self, errors: list) -> None:
        super().__init__("invalid payload")
        self.errors = errors


def get_project_store():
    return current_app.extensions['project_store']


def get_ledger():
    return current_app.extensions['marketplace_ledger']


def get_queries():
    return current_app.extensions['marketplace_queries']


def get_pinning_client():
    return current_app.extensions.get('pinning_client')


def serialize(model: BaseModel) -> dict:
    return model.model_dump(mode="json", by_alias=True)


def serialize_all(models: Iterable[BaseModel]) -> list:
    return [serialize(m) for m in models]


def parse_json(schema: Type[P]) -> P:
    """Validate the JSON body against ``schema`` or raise ``InvalidPayload``."""
    payload = request.get_json(silent=True) or {}
    return parse_mapping(schema, payload)


def parse_mapping(schema: Type[P], payload: Any) -> P:
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        raise InvalidPayload(e.errors(include_url=False, include_context=False)) from e


def invalid_payload_response(exc: InvalidPayload):
    logger.info("Rejected payload on %s: %s", request.path, exc.errors)
    return jsonify({
        "status": "error",
        "error_code": "invalid_payload",
        "message": "Request payload failed validation.",
        "errors": exc.errors,
    }), 400


def result_response(result: OperationResult):
    if result.ok:
        return jsonify(serialize(result)), 200
    return jsonify(serialize(result)), ERROR_STATUS.get(result.error_code, 400)


def not_found(message: str):
    return jsonify({"status": "error", "error_code": LedgerErrorCode.NOT_FOUND.value, "message": message}), 404


__all__ = [
    "ERROR_STATUS",
    "InvalidPayload",
    "get_project_store",
    "get_ledger",
    "get_queries",
    "get_pinning_client",
    "serialize",
    "serialize_all",
    "parse_json",
    "parse_mapping",
    "invalid_payload_response",
    "result_response",
    "not_found",
]
