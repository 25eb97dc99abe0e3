"""
Route paths and the navigation context handed to controllers.

Controllers never import the router: they receive a NavigationContext
holding the router's on_navigate function and a read-only session accessor.
"""

from dataclasses import dataclass
from typing import Any, Callable

from billed_ui.models.session import NoSession, Role, UserSession

ROUTES_PATH = {
    "Login": "/",
    "Bills": "#employee/bills",
    "NewBill": "#employee/bill/new",
    "Dashboard": "#admin/dashboard",
}

# Role allowed on each protected path
PROTECTED_PATHS = {
    ROUTES_PATH["Bills"]: Role.EMPLOYEE,
    ROUTES_PATH["NewBill"]: Role.EMPLOYEE,
    ROUTES_PATH["Dashboard"]: Role.ADMIN,
}

HOME_PATHS = {
    Role.EMPLOYEE: ROUTES_PATH["Bills"],
    Role.ADMIN: ROUTES_PATH["Dashboard"],
}


@dataclass(frozen=True)
class NavigationContext:
    """
    Capabilities shared by every controller of a view.

    Attributes:
        on_navigate: Switch to the view of a path.
        session: Return the current session.
    """

    on_navigate: Callable[[str], Any]
    session: Callable[[], UserSession | NoSession]

    def email(self) -> str:
        """Return the email of the logged-in user, or an empty string."""
        session = self.session()
        return session.email if isinstance(session, UserSession) else ""
