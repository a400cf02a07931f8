from __future__ import annotations

REQUIRED_FIELDS_MESSAGE = "Name and phone are required."


def validate_customer_form(name: str | None, phone: str | None) -> str | None:
    """Presence check only (after trimming). Returns an error message, or None when valid."""
    if not (name or "").strip() or not (phone or "").strip():
        return REQUIRED_FIELDS_MESSAGE
    return None
