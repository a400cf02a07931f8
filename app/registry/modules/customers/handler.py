"""
Stateless request handler for the customers resource.

One call per HTTP request: check configuration, ensure the table exists,
then dispatch on the method. Every response is a JSON body with a status
code; error bodies carry both a human message (`error`) and a machine
readable `code` so clients never have to match on message text.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.orm import Session

from app.registry.modules.customers.service import (
    customer_to_dict,
    delete_customer,
    ensure_schema,
    insert_customer,
    list_customers,
)

logger = logging.getLogger(__name__)

CONFIG_MISSING_MESSAGE = "DATABASE_URL environment variable is not configured."

# Error codes shared with the client (see client.py / state.py).
CONFIG_MISSING = "config_missing"
MISSING_BODY = "missing_body"
VALIDATION_ERROR = "validation_error"
NOT_FOUND = "not_found"
METHOD_NOT_ALLOWED = "method_not_allowed"
STORAGE_ERROR = "storage_error"
INTERNAL_ERROR = "internal_error"

JSON_HEADERS = {"Content-Type": "application/json"}

# Largest id a BIGINT / SQLite INTEGER column can hold.
MAX_ID = 2**63 - 1


@dataclass(frozen=True)
class HandlerEvent:
    method: str
    body: str | None = None


@dataclass(frozen=True)
class HandlerResponse:
    status_code: int
    body: str
    headers: dict[str, str] = field(default_factory=lambda: dict(JSON_HEADERS))

    def json(self) -> Any:
        return json.loads(self.body)


def _json(status_code: int, payload: Any) -> HandlerResponse:
    return HandlerResponse(status_code=status_code, body=json.dumps(payload))


def _error(status_code: int, message: str, code: str) -> HandlerResponse:
    return _json(status_code, {"error": message, "code": code})


def _parse_id(raw: Any) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        raw = raw.strip()
        if raw.isascii() and raw.isdigit():
            return int(raw)
    return None


def _present(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _handle_get(s: Session) -> HandlerResponse:
    return _json(200, [customer_to_dict(c) for c in list_customers(s)])


def _handle_post(s: Session, body: str | None) -> HandlerResponse:
    if not body:
        return _error(400, "missing body", MISSING_BODY)
    payload = json.loads(body)
    if not isinstance(payload, dict):
        payload = {}
    name = payload.get("name")
    phone = payload.get("phone")
    if not _present(name) or not _present(phone):
        return _error(400, "name and phone required", VALIDATION_ERROR)
    c = insert_customer(s, name, phone)
    s.commit()
    logger.info("Customer created id=%s", c.id)
    return _json(201, customer_to_dict(c))


def _handle_delete(s: Session, body: str | None) -> HandlerResponse:
    if not body:
        return _error(400, "missing body", MISSING_BODY)
    payload = json.loads(body)
    if not isinstance(payload, dict):
        payload = {}
    customer_id = _parse_id(payload.get("id"))
    if customer_id is None or customer_id < 1:
        return _error(400, "id required", VALIDATION_ERROR)
    deleted = delete_customer(s, customer_id) if customer_id <= MAX_ID else None
    if deleted is None:
        return _error(404, "not found", NOT_FOUND)
    s.commit()
    logger.info("Customer deleted id=%s", customer_id)
    return _json(200, {"message": "Customer deleted.", "id": customer_id})


_DISPATCH: dict[str, Callable[..., HandlerResponse]] = {
    "POST": _handle_post,
    "DELETE": _handle_delete,
}


def handle(
    event: HandlerEvent,
    *,
    database_url: str | None,
    session_factory: Callable[[], Session],
) -> HandlerResponse:
    if not database_url:
        logger.error(CONFIG_MISSING_MESSAGE)
        return _error(500, CONFIG_MISSING_MESSAGE, CONFIG_MISSING)

    try:
        s = session_factory()
    except Exception as e:
        logger.exception("Could not open a database session")
        return _error(500, str(e) or "Internal server error.", STORAGE_ERROR)

    try:
        ensure_schema(s)
        s.commit()
    except Exception as e:
        s.rollback()
        # Forward the storage message as-is; it is the operator's best clue.
        return _error(500, str(e) or "Internal server error.", STORAGE_ERROR)

    method = (event.method or "").upper()
    try:
        if method == "GET":
            return _handle_get(s)
        fn = _DISPATCH.get(method)
        if fn is None:
            return _error(405, "method not allowed", METHOD_NOT_ALLOWED)
        return fn(s, event.body)
    except Exception as e:
        s.rollback()
        logger.exception("Customers handler failed (method=%s)", method)
        return _error(500, str(e) or "Internal server error.", INTERNAL_ERROR)
