from __future__ import annotations

import logging
from collections.abc import Callable

from app.registry.modules.customers.client import CustomersApiClient, CustomersApiError
from app.registry.modules.customers.state import (
    CreateFailed,
    CreateStarted,
    CreateSucceeded,
    CustomerListState,
    CustomerRecord,
    DeleteFailed,
    DeleteStarted,
    DeleteSucceeded,
    Event,
    FetchFailed,
    FetchSucceeded,
    reduce,
)

logger = logging.getLogger(__name__)

ADD_ALERT = "Error adding customer. Please try again."
DELETE_ALERT = "Error removing customer. Please try again."


class OperationInFlightError(RuntimeError):
    pass


class InFlightGuard:
    """
    Single-slot guard for one kind of mutation.

    At most one operation holds the slot; `acquire` returns False while it is taken.
    """

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._holder: object | None = None

    @property
    def busy(self) -> bool:
        return self._holder is not None

    @property
    def holder(self) -> object | None:
        return self._holder

    def acquire(self, holder: object = True) -> bool:
        if self._holder is not None:
            return False
        self._holder = holder
        return True

    def release(self) -> None:
        self._holder = None


def _no_alert(message: str) -> None:
    pass


class CustomerController:
    """
    Holds the in-memory customer list for one page and reconciles it with API results.

    `notify` is the user-visible alert hook (the HTML views flash the message).
    """

    def __init__(self, api: CustomersApiClient, notify: Callable[[str], None] | None = None) -> None:
        self.api = api
        self.notify = notify or _no_alert
        self._state = CustomerListState()
        self._adding = InFlightGuard("create")
        # One delete at a time for the whole page, not per row.
        self._deleting = InFlightGuard("delete")

    @property
    def state(self) -> CustomerListState:
        return self._state

    def _apply(self, event: Event) -> CustomerListState:
        self._state = reduce(self._state, event)
        return self._state

    def load(self) -> CustomerListState:
        try:
            customers = self.api.list_customers()
        except CustomersApiError as e:
            return self._apply(FetchFailed(message=e.message, code=e.code))
        except OSError as e:
            return self._apply(FetchFailed(message=str(e) or "Network error."))
        return self._apply(FetchSucceeded(customers=tuple(customers)))

    def add_customer(self, name: str, phone: str) -> CustomerRecord:
        if not self._adding.acquire():
            raise OperationInFlightError(f"A {self._adding.kind} operation is already in flight.")
        self._apply(CreateStarted())
        try:
            created = self.api.create_customer(name, phone)
        except (CustomersApiError, OSError) as e:
            logger.error("Failed to add customer: %s", e)
            self._apply(CreateFailed(message=str(e)))
            self.notify(ADD_ALERT)
            raise
        finally:
            self._adding.release()
        self._apply(CreateSucceeded(customer=created))
        return created

    def delete_customer(self, customer_id: int) -> bool:
        if not self._deleting.acquire(customer_id):
            logger.info("Ignoring %s of id=%s; id=%s still in flight", self._deleting.kind, customer_id, self._deleting.holder)
            return False
        self._apply(DeleteStarted(customer_id=customer_id))
        try:
            self.api.delete_customer(customer_id)
        except (CustomersApiError, OSError) as e:
            logger.error("Failed to delete customer id=%s: %s", customer_id, e)
            self._apply(DeleteFailed(customer_id=customer_id, message=str(e)))
            self.notify(DELETE_ALERT)
            return False
        finally:
            self._deleting.release()
        self._apply(DeleteSucceeded(customer_id=customer_id))
        return True
