"""Response envelope helpers: every JSON body is {success, message, data?}."""

from __future__ import annotations

from typing import Any, Optional

from flask import jsonify, request


def ok(data: Any = None, message: str = "", status: int = 200):
    body: dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        body["data"] = data
    return jsonify(body), status


def created(data: Any = None, message: str = ""):
    return ok(data, message, status=201)


def fail(message: str, status: int = 400, *, reason: Optional[str] = None, **extra: Any):
    body: dict[str, Any] = {"success": False, "message": message}
    if reason:
        body["reason"] = reason
    body.update(extra)
    return jsonify(body), status


def json_body() -> dict:
    """Request JSON as a dict (empty when the body is missing or not an object)."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
