"""
Client-side customer list state.

The state is an immutable value; every change goes through `reduce()` with
one of the event types below, so transitions can be exercised without any
rendering or network involved.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Union

from app.registry.modules.customers.handler import CONFIG_MISSING


@dataclass(frozen=True)
class CustomerRecord:
    id: int
    name: str
    phone: str

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "CustomerRecord":
        return cls(id=int(data["id"]), name=str(data["name"]), phone=str(data["phone"]))


@dataclass(frozen=True)
class CustomerListState:
    customers: tuple[CustomerRecord, ...] = ()
    is_loading: bool = True
    error: str | None = None
    error_code: str | None = None
    is_adding: bool = False
    deleting_id: int | None = None

    @property
    def needs_setup(self) -> bool:
        return self.error_code == CONFIG_MISSING


@dataclass(frozen=True)
class FetchSucceeded:
    customers: tuple[CustomerRecord, ...]


@dataclass(frozen=True)
class FetchFailed:
    message: str
    code: str | None = None


@dataclass(frozen=True)
class CreateStarted:
    pass


@dataclass(frozen=True)
class CreateSucceeded:
    customer: CustomerRecord


@dataclass(frozen=True)
class CreateFailed:
    message: str


@dataclass(frozen=True)
class DeleteStarted:
    customer_id: int


@dataclass(frozen=True)
class DeleteSucceeded:
    customer_id: int


@dataclass(frozen=True)
class DeleteFailed:
    customer_id: int
    message: str


Event = Union[
    FetchSucceeded,
    FetchFailed,
    CreateStarted,
    CreateSucceeded,
    CreateFailed,
    DeleteStarted,
    DeleteSucceeded,
    DeleteFailed,
]


def reduce(state: CustomerListState, event: Event) -> CustomerListState:
    if isinstance(event, FetchSucceeded):
        return replace(state, customers=tuple(event.customers), is_loading=False, error=None, error_code=None)
    if isinstance(event, FetchFailed):
        return replace(state, is_loading=False, error=event.message, error_code=event.code)
    if isinstance(event, CreateStarted):
        return replace(state, is_adding=True)
    if isinstance(event, CreateSucceeded):
        # Newest first, matching the server ordering.
        return replace(state, customers=(event.customer,) + state.customers, is_adding=False)
    if isinstance(event, CreateFailed):
        return replace(state, is_adding=False)
    if isinstance(event, DeleteStarted):
        return replace(state, deleting_id=event.customer_id)
    if isinstance(event, DeleteSucceeded):
        remaining = tuple(c for c in state.customers if c.id != event.customer_id)
        return replace(state, customers=remaining, deleting_id=None)
    if isinstance(event, DeleteFailed):
        return replace(state, deleting_id=None)
    raise TypeError(f"Unknown customer list event: {event!r}")
