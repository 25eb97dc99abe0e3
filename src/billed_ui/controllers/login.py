"""
Login controller.

Opens a session for an employee or an administrator and navigates to the
role's home page. Together with Logout, it is the only writer of the
session store.
"""

from billed_ui.lib import logs
from billed_ui.models.session import Role, UserSession
from billed_ui.routes import HOME_PATHS, NavigationContext
from billed_ui.services.store import Store
from billed_ui.session import SessionStore
from billed_ui.view import SubmitEvent, ViewHandle

LOG = logs.logger(__file__)


class Login:
    """Controller of the login page."""

    def __init__(
        self,
        view: ViewHandle,
        context: NavigationContext,
        store: Store | None,
        session_store: SessionStore,
    ) -> None:
        self.view = view
        self.context = context
        self.store = store
        self.session_store = session_store
        view.bind("form-employee", "submit", self.handle_submit_employee)
        view.bind("form-admin", "submit", self.handle_submit_admin)

    async def handle_submit_employee(self, event: SubmitEvent | None = None) -> bool:
        return await self._login(Role.EMPLOYEE, "employee", event)

    async def handle_submit_admin(self, event: SubmitEvent | None = None) -> bool:
        return await self._login(Role.ADMIN, "admin", event)

    async def _login(self, role: Role, prefix: str, event: SubmitEvent | None) -> bool:
        if event is not None:
            event.prevent_default()
        email = (self.view.value(f"{prefix}-email-input") or "").strip()
        password = self.view.value(f"{prefix}-password-input") or ""
        if not email:
            self.view.alert("Veuillez saisir votre email.")
            return False

        token = None
        if self.store is not None:
            try:
                token = await self.store.login(email, password)
            except Exception as e:
                LOG.error("Login failed for %s: %s", email, e, exc_info=True)
                self.view.alert(str(e))
                return False

        self.session_store.set(UserSession(role=role, email=email), token=token)
        self.context.on_navigate(HOME_PATHS[role])
        return True
