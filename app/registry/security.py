import secrets
from flask import session, Request

CSRF_SESSION_KEY = "csrf_token"

# Blueprints serving JSON to non-browser clients; they carry no session token.
CSRF_EXEMPT_BLUEPRINTS = ("customers_api",)


def ensure_csrf_token() -> str:
    """Ensure a CSRF token exists in the session and return it."""
    token = session.get(CSRF_SESSION_KEY)
    if not token:
        token = secrets.token_urlsafe(32)
        session[CSRF_SESSION_KEY] = token
    return token


def is_csrf_exempt(req: Request) -> bool:
    return req.blueprint in CSRF_EXEMPT_BLUEPRINTS


def validate_csrf(req: Request) -> bool:
    """Validate the CSRF token from the form field or the X-CSRF-Token header."""
    token = req.headers.get("X-CSRF-Token") or req.form.get(CSRF_SESSION_KEY)
    expected = session.get(CSRF_SESSION_KEY)
    return bool(token and expected and secrets.compare_digest(token, expected))
