"""
Shared pytest fixtures for the Billed UI tests.

Provides:
- Session stores for an employee, an administrator and nobody
- Store doubles built from AsyncMock
- View handles with the bills page or new bill form mounted
- A navigation context recording navigations
"""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from billed_ui.components import build_bills_page, build_new_bill_page
from billed_ui.layout import build_vertical_layout
from billed_ui.models.bill import Bill
from billed_ui.models.session import Role, UserSession
from billed_ui.routes import NavigationContext
from billed_ui.services import DemoStore
from billed_ui.session import SessionStore
from billed_ui.view import ViewHandle

EMPLOYEE_EMAIL = "a@a"


def make_bill(bill_id: str, date: str, **fields) -> Bill:
    """Return a bill with sensible defaults."""
    defaults = {
        "type": "Transports",
        "name": f"bill {bill_id}",
        "amount": 100,
        "file_url": f"https://localhost:3456/images/{bill_id}.jpg",
        "file_name": f"{bill_id}.jpg",
    }
    defaults.update(fields)
    return Bill(id=bill_id, date=date, **defaults)


def make_store(
    bills=None,
    list_error: Exception | None = None,
    create_result: dict | None = None,
    create_error: Exception | None = None,
    update_error: Exception | None = None,
) -> MagicMock:
    """Return a store double whose bills() resource is made of AsyncMocks."""
    resource = MagicMock()
    resource.list = AsyncMock(return_value=list(bills or []), side_effect=list_error)
    resource.create = AsyncMock(
        return_value=create_result
        or {"key": "1234", "fileUrl": "https://localhost:3456/images/test.jpg"},
        side_effect=create_error,
    )
    resource.update = AsyncMock(side_effect=update_error)
    store = MagicMock()
    store.bills.return_value = resource
    return store


@pytest.fixture
def employee_session_store() -> SessionStore:
    return SessionStore(
        {"user": json.dumps({"type": "Employee", "email": EMPLOYEE_EMAIL})}
    )


@pytest.fixture
def admin_session_store() -> SessionStore:
    return SessionStore({"user": json.dumps({"type": "Admin", "email": "admin@a"})})


@pytest.fixture
def empty_session_store() -> SessionStore:
    return SessionStore()


@pytest.fixture
def demo_store() -> DemoStore:
    return DemoStore()


@pytest.fixture
def context() -> NavigationContext:
    """Navigation context whose on_navigate is a MagicMock."""
    return NavigationContext(
        on_navigate=MagicMock(),
        session=lambda: UserSession(role=Role.EMPLOYEE, email=EMPLOYEE_EMAIL),
    )


@pytest.fixture
def bills_view() -> ViewHandle:
    """View with the bills layout mounted in its loading state."""
    view = ViewHandle()
    view.mount(build_vertical_layout(build_bills_page(loading=True)))
    return view


@pytest.fixture
def new_bill_view() -> ViewHandle:
    """View with the new bill form mounted."""
    view = ViewHandle()
    view.mount(build_vertical_layout(build_new_bill_page()))
    return view
