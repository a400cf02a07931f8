from __future__ import annotations

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from app.registry.modules.customers.api import dispatch
from app.registry.modules.customers.client import (
    CustomersApiClient,
    CustomersApiError,
    HttpTransport,
    LocalTransport,
    Transport,
)
from app.registry.modules.customers.controller import CustomerController
from app.registry.modules.customers.utils import validate_customer_form

bp = Blueprint("customers", __name__)


def _transport() -> Transport:
    api_url = current_app.config.get("CUSTOMERS_API_URL")
    if api_url:
        return HttpTransport(url=api_url, timeout_seconds=int(current_app.config.get("CUSTOMERS_API_TIMEOUT") or 30))
    return LocalTransport(dispatch=dispatch)


def _alert(message: str) -> None:
    flash(message, "danger")


def _controller() -> CustomerController:
    return CustomerController(CustomersApiClient(_transport()), notify=_alert)


def _render(controller: CustomerController, *, name: str = "", phone: str = "", form_error: str = "", status: int = 200):
    return (
        render_template(
            "customers/index.html",
            state=controller.state,
            form={"name": name, "phone": phone},
            form_error=form_error,
        ),
        status,
    )


@bp.get("/")
def index():
    controller = _controller()
    controller.load()
    return _render(controller)


@bp.post("/customers")
def customers_create():
    name = request.form.get("name") or ""
    phone = request.form.get("phone") or ""
    controller = _controller()

    form_error = validate_customer_form(name, phone)
    if form_error:
        controller.load()
        return _render(controller, name=name, phone=phone, form_error=form_error, status=400)

    try:
        controller.add_customer(name, phone)
    except (CustomersApiError, OSError):
        # The alert was already flashed; keep what the user typed.
        controller.load()
        return _render(controller, name=name, phone=phone)
    return redirect(url_for("customers.index"))


@bp.post("/customers/<int:customer_id>/delete")
def customers_delete(customer_id: int):
    _controller().delete_customer(customer_id)
    return redirect(url_for("customers.index"))
