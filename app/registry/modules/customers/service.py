from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session
from sqlalchemy.schema import CreateTable

from app.registry.modules.customers.models import Customer

logger = logging.getLogger(__name__)


def ensure_schema(s: Session) -> None:
    """
    Create the customers table if it does not exist yet.

    Safe to call on every request: IF NOT EXISTS never touches existing rows.
    """
    try:
        s.connection().execute(CreateTable(Customer.__table__, if_not_exists=True))
    except Exception:
        logger.exception("Failed to create or verify the 'customers' table")
        raise


def list_customers(s: Session) -> list[Customer]:
    return s.query(Customer).order_by(Customer.id.desc()).all()


def get_customer_by_id(s: Session, customer_id: int) -> Customer | None:
    return s.query(Customer).filter(Customer.id == customer_id).one_or_none()


def insert_customer(s: Session, name: str, phone: str) -> Customer:
    c = Customer(name=name, phone=phone)
    s.add(c)
    s.flush()
    return c


def delete_customer(s: Session, customer_id: int) -> Customer | None:
    """Delete by id. Returns the removed row, or None when nothing matched."""
    c = get_customer_by_id(s, customer_id)
    if c is None:
        return None
    s.delete(c)
    s.flush()
    return c


def customer_to_dict(c: Customer) -> dict[str, Any]:
    return {"id": c.id, "name": c.name, "phone": c.phone}
