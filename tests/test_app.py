"""
Tests for the Dash adapter helpers and callbacks.

Callbacks are plain functions once registered, so they are called directly.
Those reading dash.ctx run inside a copied context holding the triggering
input, the way Dash documents callback unit tests.
"""

import asyncio
import base64
import json
import threading
from contextvars import copy_context

import pytest
from dash import html, no_update
from dash._callback_context import context_value
from dash._utils import AttributeDict

from billed_ui import app as billed_app
from billed_ui.controllers.new_bill import INVALID_FILE_MESSAGE
from billed_ui.services import get_store
from billed_ui.services.errors import ClientError
from billed_ui.view import iter_components, iter_text
from conftest import make_store


@pytest.fixture(autouse=True)
def app_state(monkeypatch):
    monkeypatch.setenv("BILLED_UI_STORE", "demo")
    get_store.cache_clear()
    billed_app.SUBMISSIONS.reset()
    yield
    get_store.cache_clear()
    billed_app.SUBMISSIONS.reset()


def employee_session():
    return {"user": json.dumps({"type": "Employee", "email": "employee@test.tld"})}


def ids(children):
    return {c.id for c in iter_components(children) if isinstance(getattr(c, "id", None), str)}


def text(children):
    return " ".join(iter_text(children))


def data_url(content: bytes, content_type: str = "image/png") -> str:
    return f"data:{content_type};base64," + base64.b64encode(content).decode()


def form_values(name="Test Transport", date="2024-03-14"):
    # Same order as the State inputs of submit_bill
    return ["Transports", name, date, 100, 20, 20, ""]


def listed_bills():
    bills = asyncio.run(get_store().bills().list())
    return [(bill.name, bill.file_name) for bill in bills if bill.date.startswith("2024")]


def triggered(prop_id, callback, *args):
    """Call a callback as if prop_id had fired."""

    def run():
        context_value.set(
            AttributeDict(triggered_inputs=[{"prop_id": prop_id, "value": 1}])
        )
        return callback(*args)

    return copy_context().run(run)


class TestHelpers:
    def test_hash_for(self):
        assert billed_app.hash_for("/") == ""
        assert billed_app.hash_for(None) == ""
        assert billed_app.hash_for("#employee/bills") == "#employee/bills"

    def test_decode_upload(self):
        upload = billed_app.decode_upload(data_url(b"\x89PNG"), "photo.png")

        assert upload.name == "photo.png"
        assert upload.content == b"\x89PNG"
        assert upload.content_type == "image/png"

    def test_decode_garbage_upload(self):
        upload = billed_app.decode_upload("data:image/png;base64,%%%", "photo.png")

        assert upload.content == b""

    def test_build_router_reads_session(self):
        router = billed_app.build_router(employee_session())

        assert router.session_store.get().email == "employee@test.tld"

    def test_submission_key_depends_on_receipt(self):
        values = form_values()

        assert billed_app.submission_key(values, None, None) == billed_app.submission_key(
            list(values), None, None
        )
        assert billed_app.submission_key(values, None, None) != billed_app.submission_key(
            values, {"name": "a.png"}, None
        )


class TestRenderPage:
    def test_no_session_renders_login(self):
        children, _ = billed_app.render_page(None, None)

        assert "form-employee" in ids(children)

    def test_employee_bills_are_rendered(self):
        children, pending = billed_app.render_page("#employee/bills", employee_session())

        found = ids(children)
        assert "tbody" in found
        assert "loading" not in found
        assert pending is no_update

    def test_new_bill_form_starts_without_receipt(self):
        children, pending = billed_app.render_page("#employee/bill/new", employee_session())

        assert "form-new-bill" in ids(children)
        assert pending is None


class TestChangeFile:
    """Receipt validation through the upload control."""

    def test_accepted_receipt_is_kept(self):
        pending, message, displayed, contents = billed_app.change_file(
            data_url(b"img"), "photo.PNG", employee_session()
        )

        assert pending["file_name"] == "photo.PNG"
        assert base64.b64decode(pending["content"]) == b"img"
        assert message is no_update
        assert displayed is False
        assert contents is no_update

    def test_rejected_receipt_alerts_and_clears_input(self):
        pending, message, displayed, contents = billed_app.change_file(
            data_url(b"%PDF", "application/pdf"), "report.pdf", employee_session()
        )

        assert pending is None
        assert message == INVALID_FILE_MESSAGE
        assert displayed is True
        assert contents is None

    def test_without_session_nothing_is_kept(self):
        pending, _, _, contents = billed_app.change_file(data_url(b"img"), "photo.png", None)

        assert pending is None
        assert contents is None

    def test_cleared_input_is_ignored(self):
        assert billed_app.change_file(None, None, employee_session()) == (
            no_update,
            no_update,
            no_update,
            no_update,
        )


class TestSubmitBill:
    """Submitting the new bill form through the Dash callback."""

    def pick(self, name="first.png"):
        pending, *_ = billed_app.change_file(data_url(b"img"), name, employee_session())
        return pending

    def test_success_navigates_and_consumes_receipt(self):
        upload = self.pick()

        outputs = billed_app.submit_bill(1, *form_values("first"), upload, employee_session())

        assert outputs == ("#employee/bills", None, None)
        assert listed_bills() == [("first", "first.png")]

    def test_receipt_is_not_reused_by_the_next_bill(self):
        upload = self.pick()
        billed_app.submit_bill(1, *form_values("first"), upload, employee_session())
        _, pending = billed_app.render_page("#employee/bill/new", employee_session())

        billed_app.submit_bill(
            2, *form_values("second", "2024-03-15"), pending, employee_session()
        )

        assert sorted(listed_bills()) == [("first", "first.png"), ("second", None)]

    def test_store_failure_shows_error_and_keeps_receipt(self, monkeypatch):
        store = make_store(create_error=ClientError(404))
        store.with_token.return_value = store
        monkeypatch.setattr(billed_app, "get_store", lambda: store)
        upload = self.pick()

        url_hash, error, pending = billed_app.submit_bill(
            1, *form_values(), upload, employee_session()
        )

        assert url_hash is no_update
        assert pending is no_update
        assert "Erreur 404" in text(error)
        store.bills().update.assert_not_awaited()

    def test_failed_submission_can_be_retried(self, monkeypatch):
        store = make_store(create_error=ClientError(404))
        store.with_token.return_value = store
        monkeypatch.setattr(billed_app, "get_store", lambda: store)
        upload = self.pick()
        billed_app.submit_bill(1, *form_values(), upload, employee_session())

        store.bills().create.side_effect = None
        outputs = billed_app.submit_bill(2, *form_values(), upload, employee_session())

        assert outputs == ("#employee/bills", None, None)
        assert store.bills().create.await_count == 2

    def test_repeated_click_creates_one_bill(self):
        upload = self.pick()
        args = (*form_values(), upload, employee_session())

        first = billed_app.submit_bill(1, *args)
        second = billed_app.submit_bill(2, *args)

        assert first[0] == "#employee/bills"
        assert second == (no_update, no_update, no_update)
        assert listed_bills() == [("Test Transport", "first.png")]

    def test_concurrent_clicks_create_one_bill(self):
        upload = self.pick()
        args = (*form_values(), upload, employee_session())
        results = []
        threads = [
            threading.Thread(target=lambda: results.append(billed_app.submit_bill(1, *args)))
            for _ in range(2)
        ]

        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sorted(r[0] is no_update for r in results) == [False, True]
        assert listed_bills() == [("Test Transport", "first.png")]

    def test_submission_running_elsewhere_is_ignored(self):
        upload = self.pick()
        args = (*form_values(), upload, employee_session())
        key = billed_app.submission_key(list(args[:-2]), upload, employee_session())

        with billed_app.SUBMISSIONS.claim(key) as claimed:
            assert claimed is True
            assert billed_app.submit_bill(1, *args) == (no_update, no_update, no_update)

        assert listed_bills() == []

    def test_without_click_nothing_happens(self):
        outputs = billed_app.submit_bill(0, *form_values(), None, employee_session())

        assert outputs == (no_update, no_update, no_update)


class TestTogglePreview:
    """Receipt modal driven by the eye icons and the close button."""

    urls = ["https://localhost:3456/images/a.jpg", ""]

    def eye(self, index):
        return json.dumps({"index": index, "type": "icon-eye"}, separators=(",", ":"))

    def test_eye_shows_receipt(self):
        body, class_name, style = triggered(
            f"{self.eye(0)}.n_clicks",
            billed_app.toggle_preview,
            [1, 0],
            0,
            self.urls,
            employee_session(),
        )

        image = next(c for c in iter_components(body) if isinstance(c, html.Img))
        assert image.src == self.urls[0]
        assert "show" in class_name.split()
        assert style["display"] == "block"

    def test_eye_without_receipt_shows_placeholder(self):
        body, _, style = triggered(
            f"{self.eye(1)}.n_clicks",
            billed_app.toggle_preview,
            [0, 1],
            0,
            self.urls,
            employee_session(),
        )

        assert not any(isinstance(c, html.Img) for c in iter_components(body))
        assert "Aucun justificatif disponible" in text(body)
        assert style["display"] == "block"

    def test_close_hides_modal(self):
        outputs = triggered(
            "modal-close.n_clicks",
            billed_app.toggle_preview,
            [0, 0],
            1,
            self.urls,
            employee_session(),
        )

        assert outputs == (no_update, "modal fade", {"display": "none"})


class TestLogout:
    def test_disconnect_clears_session(self):
        session = {**employee_session(), "jwt": "token"}

        assert billed_app.logout(1, session) == ("", None)

    def test_without_click_nothing_happens(self):
        assert billed_app.logout(0, employee_session()) == (no_update, no_update)


class TestLogin:
    """Opening a session from the login forms."""

    def login(self, button, employee_email=None, admin_email=None):
        return triggered(
            f"{button}.n_clicks",
            billed_app.login,
            1,
            0,
            employee_email,
            "pwd",
            admin_email,
            "pwd",
            None,
        )

    def test_employee_login(self):
        url_hash, session, message, displayed = self.login(
            "employee-login-button", employee_email="employee@test.tld"
        )

        assert url_hash == "#employee/bills"
        assert json.loads(session["user"]) == {
            "type": "Employee",
            "email": "employee@test.tld",
        }
        assert message is no_update
        assert displayed is no_update

    def test_admin_login(self):
        url_hash, session, _, _ = self.login("admin-login-button", admin_email="admin@test.tld")

        assert url_hash == "#admin/dashboard"
        assert json.loads(session["user"])["type"] == "Admin"

    def test_missing_email_alerts(self):
        outputs = self.login("employee-login-button")

        assert outputs == (no_update, no_update, "Veuillez saisir votre email.", True)
