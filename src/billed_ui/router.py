"""
Navigation router of the Billed UI.

Maps a route path to the view to mount, after checking the stored session:

- no session: every protected path shows the login page
- wrong role or unknown path: the role's home page
  (bills for employees, dashboard for administrators)

The router mounts the view into its ViewHandle, builds the controllers
with an explicit NavigationContext, highlights the navigation icon of the
active path, and binds the disconnect control. Fetching bills is scheduled
on the running event loop; on_navigate() stays callable from synchronous
code and runs the fetch to completion when no loop is running.
"""

import asyncio
from typing import Any, Coroutine

from billed_ui.components import (
    build_bills_page,
    build_dashboard_page,
    build_login_page,
    build_new_bill_page,
)
from billed_ui.controllers import Bills, Login, Logout, NewBill
from billed_ui.layout import ACTIVE_ICON_CLASS, NAV_ICONS, build_vertical_layout
from billed_ui.lib import logs
from billed_ui.models.session import NoSession
from billed_ui.routes import HOME_PATHS, PROTECTED_PATHS, ROUTES_PATH, NavigationContext
from billed_ui.services.store import Store
from billed_ui.session import SessionStore
from billed_ui.view import ViewHandle, add_class, remove_class

LOG = logs.logger(__file__)


class Router:
    """
    Path-based view switching for one view handle.

    Attributes:
        view: Handle the views are mounted into.
        store: Remote store passed to the controllers.
        session_store: Session read on every navigation.
        context: Navigation context given to every controller.
        path: Path of the mounted view.
        controller: Main controller of the mounted view.
    """

    def __init__(
        self,
        view: ViewHandle,
        store: Store | None,
        session_store: SessionStore,
    ) -> None:
        self.view = view
        self.store = store
        self.session_store = session_store
        self.context = NavigationContext(
            on_navigate=self.on_navigate, session=session_store.get
        )
        self.path: str | None = None
        self.controller: Any = None
        self._tasks: set[asyncio.Task] = set()

    def resolve(self, path: str | None) -> str:
        """Return the path actually displayed for a requested path."""
        session = self.session_store.get()
        if isinstance(session, NoSession):
            return ROUTES_PATH["Login"]
        if path == ROUTES_PATH["Login"]:
            return path
        if PROTECTED_PATHS.get(path) is session.role:
            return path
        return HOME_PATHS[session.role]

    def on_navigate(self, path: str | None) -> asyncio.Task | None:
        """
        Mount the view of a path.

        Returns:
            The task fetching the view's data when one was scheduled on the
            running loop, None otherwise.
        """
        resolved = self.resolve(path)
        if resolved != path:
            LOG.info("Navigation to %s redirected to %s", path, resolved)
        self.path = resolved

        if resolved == ROUTES_PATH["Bills"]:
            self._mount_layout(build_bills_page(loading=True), resolved)
            self.controller = Bills(self.view, self.context, self.store)
            self._bind_logout()
            return self._schedule(self.controller.retrieve_and_render())

        if resolved == ROUTES_PATH["NewBill"]:
            self._mount_layout(build_new_bill_page(), resolved)
            self.controller = NewBill(self.view, self.context, self.store)
            self._bind_logout()
            return None

        if resolved == ROUTES_PATH["Dashboard"]:
            self._mount_layout(build_dashboard_page(), resolved, show_nav_icons=False)
            self.controller = None
            self._bind_logout()
            return None

        self.view.mount(build_login_page())
        self.controller = Login(self.view, self.context, self.store, self.session_store)
        return None

    async def navigate(self, path: str | None) -> None:
        """Navigate and wait for the view's data to be rendered."""
        task = self.on_navigate(path)
        if task is not None:
            await task

    async def settle(self) -> None:
        """Wait until every scheduled fetch has completed."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def _mount_layout(self, content, path: str, show_nav_icons: bool = True) -> int:
        token = self.view.mount(build_vertical_layout(content, show_nav_icons))
        self._highlight(path)
        return token

    def _highlight(self, path: str) -> None:
        for icon_id, route in NAV_ICONS.items():
            icon = self.view.query(icon_id)
            if icon is None:
                continue
            if ROUTES_PATH[route] == path:
                add_class(icon, ACTIVE_ICON_CLASS)
            else:
                remove_class(icon, ACTIVE_ICON_CLASS)

    def _bind_logout(self) -> None:
        Logout(self.view, self.context, self.session_store)

    def _schedule(self, coro: Coroutine) -> asyncio.Task | None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(coro)
            return None
        task = loop.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task
