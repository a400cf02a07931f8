from __future__ import annotations

from flask import Blueprint, current_app, make_response, request

from app.registry.db import db_session
from app.registry.modules.customers.handler import HandlerEvent, HandlerResponse, handle

bp = Blueprint("customers_api", __name__)

# Every method is routed to the handler so it answers unsupported ones with its own JSON 405.
_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


def dispatch(event: HandlerEvent) -> HandlerResponse:
    """Run the customers handler against the current app's config and request session."""
    return handle(
        event,
        database_url=current_app.config.get("DATABASE_URL"),
        session_factory=db_session,
    )


@bp.route("/api/customers", methods=_METHODS)
def customers_endpoint():
    body = request.get_data(as_text=True) or None
    result = dispatch(HandlerEvent(method=request.method, body=body))
    resp = make_response(result.body, result.status_code)
    for k, v in result.headers.items():
        resp.headers[k] = v
    return resp
