"""
Dash application entry point for the Billed UI.

Each callback rebuilds a Router around a fresh ViewHandle from the session
kept in the browser's localStorage (dcc.Store "session-store"), forwards
the browser event to the matching controller, and turns the outcome into
Dash outputs: the URL hash when the controller navigated, or the pieces
of the view it re-rendered.

Environment Variables:
    BILLED_UI_PORT: Development server port (default 8050)
    BILLED_UI_DEBUG: Enable Dash debug mode (default false)
    BILLED_UI_STORE: Remote store kind, "demo" or "http" (default demo)
"""

import asyncio
import base64
import binascii
import hashlib
import os
import time
from contextlib import contextmanager
from threading import Lock
from typing import Iterator

from dash import ALL, Dash, Input, Output, State, ctx, html, no_update

from billed_ui.components import build_eye_icon, build_preview_modal
from billed_ui.components.bills_ui import MODAL_BODY_ID, MODAL_ID
from billed_ui.components.new_bill_ui import FORM_ERROR_ID
from billed_ui.controllers import Bills, Logout, NewBill
from billed_ui.layout import build_layout
from billed_ui.lib import logs, objects
from billed_ui.models.common import SubmissionStatus, UploadedFile
from billed_ui.router import Router
from billed_ui.routes import ROUTES_PATH
from billed_ui.services import get_store
from billed_ui.session import SessionStore
from billed_ui.view import FileChangeEvent, SubmitEvent, ViewHandle

LOG = logs.logger(__file__)

APP_PORT = int(os.getenv("BILLED_UI_PORT", "8050"))
APP_DEBUG = os.getenv("BILLED_UI_DEBUG", "false").lower() in {"1", "true", "yes"}

app = Dash(__name__, title="Billed", suppress_callback_exceptions=True)
app.layout = build_layout()
server = app.server

_FORM_FIELDS = (
    "expense-type",
    "expense-name",
    "datepicker",
    "amount",
    "vat",
    "pct",
    "commentary",
)


def build_router(session_data: dict | None) -> Router:
    """Return a router for one request, bound to the browser's session."""
    session_store = SessionStore(dict(session_data or {}))
    store = get_store().with_token(session_store.token())
    return Router(ViewHandle(), store, session_store)


def hash_for(path: str | None) -> str:
    """Return the URL hash of a route path."""
    return "" if not path or path == ROUTES_PATH["Login"] else path


def decode_upload(contents: str, filename: str | None) -> UploadedFile:
    """Decode a dcc.Upload data URL ("data:<type>;base64,<payload>")."""
    header, _, payload = contents.partition(",")
    content_type = header.removeprefix("data:").split(";")[0] or "application/octet-stream"
    try:
        content = base64.b64decode(payload)
    except (binascii.Error, ValueError):
        LOG.warning("Could not decode upload %s", filename)
        content = b""
    return UploadedFile(name=filename or "", content=content, content_type=content_type)


def _storage_data(router: Router) -> dict | None:
    return dict(router.session_store.storage) or None


def submission_key(values: list, upload: dict | None, session_data: dict | None) -> str:
    """Return a fingerprint of one submission of the new bill form."""
    payload = objects.to_json([list(values), upload, session_data])
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class SubmissionGuard:
    """
    Process-wide record of new bill submissions.

    Each callback builds its own NewBill controller, so the controller lock
    only covers one request. The guard covers repeated requests carrying
    the same form, session and receipt: one is ignored while the same
    submission runs, or for window seconds after it succeeded.
    """

    def __init__(self, window: float = 5.0) -> None:
        self.window = window
        self._running: set[str] = set()
        self._completed: dict[str, float] = {}
        self._lock = Lock()

    @contextmanager
    def claim(self, key: str) -> Iterator[bool]:
        """Hold a submission for the block; yields False for a repeat."""
        with self._lock:
            now = time.monotonic()
            self._completed = {
                k: done for k, done in self._completed.items() if now - done < self.window
            }
            claimed = key not in self._running and key not in self._completed
            if claimed:
                self._running.add(key)
        try:
            yield claimed
        finally:
            if claimed:
                with self._lock:
                    self._running.discard(key)

    def complete(self, key: str) -> None:
        """Record a successful submission."""
        with self._lock:
            self._completed[key] = time.monotonic()

    def reset(self) -> None:
        with self._lock:
            self._running.clear()
            self._completed.clear()


SUBMISSIONS = SubmissionGuard()


@app.callback(
    Output("root", "children"),
    Output("pending-upload", "data"),
    Input("url", "hash"),
    State("session-store", "data"),
)
def render_page(url_hash: str | None, session_data: dict | None) -> tuple:
    """
    Mount the view of the current hash.

    Mounting the new bill form starts with no receipt selected.
    """
    router = build_router(session_data)
    router.on_navigate(url_hash or ROUTES_PATH["Login"])
    pending = None if router.path == ROUTES_PATH["NewBill"] else no_update
    return router.view.root.children, pending


@app.callback(
    Output("url", "hash", allow_duplicate=True),
    Input("btn-new-bill", "n_clicks"),
    State("session-store", "data"),
    prevent_initial_call=True,
)
def click_new_bill(n_clicks: int | None, session_data: dict | None) -> object:
    if not n_clicks:
        return no_update
    router = build_router(session_data)
    Bills(router.view, router.context, None).handle_click_new_bill()
    return hash_for(router.path)


@app.callback(
    Output(MODAL_BODY_ID, "children"),
    Output(MODAL_ID, "className"),
    Output(MODAL_ID, "style"),
    Input({"type": "icon-eye", "index": ALL}, "n_clicks"),
    Input("modal-close", "n_clicks"),
    State("bill-urls", "data"),
    State("session-store", "data"),
    prevent_initial_call=True,
)
def toggle_preview(
    eye_clicks: list, close_clicks: int | None, urls: list | None, session_data: dict | None
) -> tuple:
    """Open the receipt preview of the clicked row, or close the modal."""
    if not ctx.triggered or not ctx.triggered[0]["value"]:
        return no_update, no_update, no_update
    if ctx.triggered_id == "modal-close":
        return no_update, "modal fade", {"display": "none"}

    index = ctx.triggered_id["index"]
    url = urls[index] if urls and 0 <= index < len(urls) else None
    router = build_router(session_data)
    router.view.mount(html.Div([build_eye_icon(url, index), build_preview_modal()]))
    Bills(router.view, router.context, None).handle_click_icon_eye(
        router.view.query("icon-eye")
    )
    modal = router.view.query(MODAL_ID)
    return router.view.query(MODAL_BODY_ID).children, modal.className, modal.style


@app.callback(
    Output("pending-upload", "data", allow_duplicate=True),
    Output("alert", "message"),
    Output("alert", "displayed"),
    Output("file", "contents"),
    Input("file", "contents"),
    State("file", "filename"),
    State("session-store", "data"),
    prevent_initial_call=True,
)
def change_file(contents: str | None, filename: str | None, session_data: dict | None) -> tuple:
    """Validate the receipt picked in the upload control."""
    if contents is None:
        return no_update, no_update, no_update, no_update
    router = build_router(session_data)
    router.on_navigate(ROUTES_PATH["NewBill"])
    controller = router.controller
    if not isinstance(controller, NewBill):
        return None, no_update, no_update, None

    event = FileChangeEvent(
        target=router.view.query("file"), files=[decode_upload(contents, filename)]
    )
    if controller.handle_change_file(event):
        return controller.upload_snapshot(), no_update, False, no_update
    return None, router.view.alerts[-1], True, None


@app.callback(
    Output("url", "hash", allow_duplicate=True),
    Output(FORM_ERROR_ID, "children"),
    Output("pending-upload", "data", allow_duplicate=True),
    Input("btn-send-bill", "n_clicks"),
    *(State(field, "value") for field in _FORM_FIELDS),
    State("pending-upload", "data"),
    State("session-store", "data"),
    prevent_initial_call=True,
)
def submit_bill(n_clicks: int | None, *args) -> tuple:
    """
    Submit the new bill form.

    A successful submission consumes the pending receipt. Repeated clicks
    are filtered by SUBMISSIONS.
    """
    if not n_clicks:
        return no_update, no_update, no_update
    *values, upload, session_data = args
    key = submission_key(values, upload, session_data)
    with SUBMISSIONS.claim(key) as claimed:
        if not claimed:
            LOG.warning("Repeated submission ignored")
            return no_update, no_update, no_update
        url_hash, error, pending = _submit_bill(values, upload, session_data)
        if error is None:
            SUBMISSIONS.complete(key)
        return url_hash, error, pending


def _submit_bill(values: list, upload: dict | None, session_data: dict | None) -> tuple:
    router = build_router(session_data)
    router.on_navigate(ROUTES_PATH["NewBill"])
    controller = router.controller
    if not isinstance(controller, NewBill):
        return hash_for(router.path), no_update, None

    for field, value in zip(_FORM_FIELDS, values):
        router.view.set_value(field, value)
    controller.restore_upload(upload)

    async def _submit() -> None:
        await controller.handle_submit(SubmitEvent())
        await router.settle()

    asyncio.run(_submit())
    if controller.status is SubmissionStatus.NAVIGATED:
        return hash_for(router.path), None, None
    return no_update, router.view.query(FORM_ERROR_ID).children, no_update


@app.callback(
    Output("url", "hash", allow_duplicate=True),
    Output("session-store", "data", allow_duplicate=True),
    Input("layout-disconnect", "n_clicks"),
    State("session-store", "data"),
    prevent_initial_call=True,
)
def logout(n_clicks: int | None, session_data: dict | None) -> tuple:
    if not n_clicks:
        return no_update, no_update
    router = build_router(session_data)
    Logout(router.view, router.context, router.session_store).handle_click()
    return hash_for(router.path), _storage_data(router)


@app.callback(
    Output("url", "hash", allow_duplicate=True),
    Output("session-store", "data", allow_duplicate=True),
    Output("alert", "message", allow_duplicate=True),
    Output("alert", "displayed", allow_duplicate=True),
    Input("employee-login-button", "n_clicks"),
    Input("admin-login-button", "n_clicks"),
    State("employee-email-input", "value"),
    State("employee-password-input", "value"),
    State("admin-email-input", "value"),
    State("admin-password-input", "value"),
    State("session-store", "data"),
    prevent_initial_call=True,
)
def login(
    employee_clicks: int | None,
    admin_clicks: int | None,
    employee_email: str | None,
    employee_password: str | None,
    admin_email: str | None,
    admin_password: str | None,
    session_data: dict | None,
) -> tuple:
    """Open a session from one of the two login forms."""
    if not ctx.triggered or not ctx.triggered[0]["value"]:
        return no_update, no_update, no_update, no_update
    router = build_router(session_data)
    router.on_navigate(ROUTES_PATH["Login"])
    controller = router.controller
    view = router.view
    view.set_value("employee-email-input", employee_email)
    view.set_value("employee-password-input", employee_password)
    view.set_value("admin-email-input", admin_email)
    view.set_value("admin-password-input", admin_password)

    if ctx.triggered_id == "admin-login-button":
        handler = controller.handle_submit_admin
    else:
        handler = controller.handle_submit_employee
    async def _login() -> bool:
        opened = await handler(SubmitEvent())
        await router.settle()
        return opened

    if asyncio.run(_login()):
        return hash_for(router.path), _storage_data(router), no_update, no_update
    return no_update, no_update, view.alerts[-1], True


def main() -> None:
    """Start the development server."""
    app.run(debug=APP_DEBUG, host="0.0.0.0", port=APP_PORT)


if __name__ == "__main__":
    main()
