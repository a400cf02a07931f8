from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from app.registry.modules.customers.handler import HandlerEvent, HandlerResponse
from app.registry.modules.customers.state import CustomerRecord

logger = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = "Failed to fetch customers from the database."
ADD_FAILED_MESSAGE = "Failed to add customer."
DELETE_FAILED_MESSAGE = "Failed to remove customer."


class CustomersApiError(RuntimeError):
    def __init__(self, message: str, *, status: int | None = None, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code


class Transport(Protocol):
    def send(self, method: str, payload: dict[str, Any] | None = None) -> tuple[int, str]:
        ...


@dataclass(frozen=True)
class HttpTransport:
    """Talks to a remote /api/customers endpoint. No retries: recovery is user-initiated."""

    url: str
    timeout_seconds: int = 30

    def send(self, method: str, payload: dict[str, Any] | None = None) -> tuple[int, str]:
        data = json.dumps(payload).encode("utf-8") if payload is not None else None
        req = urllib.request.Request(self.url, data=data, method=method)
        req.add_header("Accept", "application/json")
        if data is not None:
            req.add_header("Content-Type", "application/json")
        try:
            with urllib.request.urlopen(req, timeout=self.timeout_seconds) as resp:
                return resp.status, resp.read().decode("utf-8")
        except urllib.error.HTTPError as e:
            try:
                body = e.read().decode("utf-8", errors="ignore")
            except OSError:
                body = ""
            return e.code, body


@dataclass(frozen=True)
class LocalTransport:
    """Calls the request handler in-process (same app, no network hop)."""

    dispatch: Callable[[HandlerEvent], HandlerResponse]

    def send(self, method: str, payload: dict[str, Any] | None = None) -> tuple[int, str]:
        body = json.dumps(payload) if payload is not None else None
        result = self.dispatch(HandlerEvent(method=method, body=body))
        return result.status_code, result.body


def _raise_for_error(status: int, body: str, default_message: str) -> None:
    if 200 <= status < 300:
        return
    message = default_message
    code = None
    try:
        data = json.loads(body)
    except ValueError:
        # Error body was not JSON; keep the generic message.
        data = None
    if isinstance(data, dict):
        message = data.get("error") or message
        code = data.get("code")
    raise CustomersApiError(message, status=status, code=code)


@dataclass(frozen=True)
class CustomersApiClient:
    transport: Transport

    def list_customers(self) -> list[CustomerRecord]:
        status, body = self.transport.send("GET")
        _raise_for_error(status, body, FETCH_FAILED_MESSAGE)
        rows = json.loads(body)
        return [CustomerRecord.from_json(r) for r in rows]

    def create_customer(self, name: str, phone: str) -> CustomerRecord:
        status, body = self.transport.send("POST", {"name": name, "phone": phone})
        _raise_for_error(status, body, ADD_FAILED_MESSAGE)
        return CustomerRecord.from_json(json.loads(body))

    def delete_customer(self, customer_id: int) -> int:
        status, body = self.transport.send("DELETE", {"id": customer_id})
        _raise_for_error(status, body, DELETE_FAILED_MESSAGE)
        return int(json.loads(body).get("id", customer_id))
