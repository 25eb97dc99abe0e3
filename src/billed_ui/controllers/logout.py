"""Logout handler attached to the disconnect control of every layout view."""

from billed_ui.lib import logs
from billed_ui.routes import ROUTES_PATH, NavigationContext
from billed_ui.session import SessionStore
from billed_ui.view import ViewHandle

LOG = logs.logger(__file__)


class Logout:
    """Clears the session and returns to the login page."""

    def __init__(
        self,
        view: ViewHandle,
        context: NavigationContext,
        session_store: SessionStore,
    ) -> None:
        self.context = context
        self.session_store = session_store
        view.bind("layout-disconnect", "click", self.handle_click)

    def handle_click(self, *_) -> None:
        self.session_store.clear()
        self.context.on_navigate(ROUTES_PATH["Login"])
