"""
Tests for the bills list controller and page.
"""

import pytest
from dash import html

from billed_ui.components import build_bills_page
from billed_ui.controllers.bills import Bills
from billed_ui.layout import build_vertical_layout
from billed_ui.models.common import Data, Error, Loading
from billed_ui.services.errors import ClientError, NetworkFailure, ServerError
from billed_ui.view import ViewHandle, iter_components
from conftest import make_bill, make_store

UNSORTED = [
    make_bill("b", "2001-01-01", name="oldest"),
    make_bill("a", "2004-04-04", name="newest"),
    make_bill("c", "2003-03-03", name="middle"),
    make_bill("d", "2002-02-02", name="older", file_url=None),
]


def row_names(view):
    tbody = view.query("tbody")
    return [row.children[1].children for row in tbody.children]


@pytest.mark.asyncio
class TestRetrieveAndRender:
    """Fetching the bills and rendering the outcome."""

    async def test_renders_bills_most_recent_first(self, bills_view, context):
        controller = Bills(bills_view, context, make_store(UNSORTED))

        state = await controller.retrieve_and_render()

        assert isinstance(state, Data)
        assert row_names(bills_view) == ["newest", "middle", "older", "oldest"]
        assert "Mes notes de frais" in bills_view.text()
        assert "4 Avr. 04" in bills_view.text()
        assert "Loading..." not in bills_view.text()

    async def test_get_bills_returns_display_order(self, bills_view, context):
        controller = Bills(bills_view, context, make_store(UNSORTED))

        bills = await controller.get_bills()

        assert [b.date for b in bills] == [
            "2004-04-04",
            "2003-03-03",
            "2002-02-02",
            "2001-01-01",
        ]

    @pytest.mark.parametrize(
        "failure, message",
        [
            (ClientError(404), "Erreur 404"),
            (ServerError(500), "Erreur 500"),
            (NetworkFailure(), "Erreur réseau"),
        ],
    )
    async def test_failure_renders_error_page(
        self, bills_view, context, failure, message
    ):
        controller = Bills(bills_view, context, make_store(list_error=failure))

        state = await controller.retrieve_and_render()

        assert state == Error(message)
        assert "Erreur" in bills_view.text()
        assert bills_view.query("error-message").children == message
        assert bills_view.query("tbody") is None

    async def test_without_store_nothing_is_fetched(self, bills_view, context):
        controller = Bills(bills_view, context, None)

        state = await controller.retrieve_and_render()

        assert state == Loading()
        assert "Loading..." in bills_view.text()

    async def test_stale_view_is_not_rendered(self, bills_view, context):
        store = make_store(UNSORTED)
        controller = Bills(bills_view, context, store)
        bills_view.mount(html.Div("Another page"))

        await controller.retrieve_and_render()

        store.bills().list.assert_awaited_once()
        assert bills_view.text() == "Another page"

    async def test_render_rebinds_new_bill_button(self, bills_view, context):
        controller = Bills(bills_view, context, make_store(UNSORTED))
        await controller.retrieve_and_render()

        bills_view.dispatch("btn-new-bill", "click")

        context.on_navigate.assert_called_once_with("#employee/bill/new")


class TestNavigation:
    def test_new_bill_button_opens_form(self, context):
        view = ViewHandle()
        view.mount(build_vertical_layout(build_bills_page(data=UNSORTED)))
        controller = Bills(view, context, None)

        controller.handle_click_new_bill()

        context.on_navigate.assert_called_once_with("#employee/bill/new")


@pytest.mark.asyncio
class TestReceiptPreview:
    """Clicking an eye icon opens the receipt modal."""

    async def test_icon_shows_receipt_image(self, bills_view, context):
        controller = Bills(bills_view, context, make_store(UNSORTED))
        await controller.retrieve_and_render()
        icon = bills_view.query_all("icon-eye")[0]

        bills_view.dispatch(icon, "click")

        image = next(
            c
            for c in iter_components(bills_view.query("modaleFile-body"))
            if isinstance(c, html.Img)
        )
        assert image.src == "https://localhost:3456/images/a.jpg"
        assert image.width == 500
        assert bills_view.shown_modals == ["modaleFile"]
        assert "show" in bills_view.query("modaleFile").className

    async def test_missing_receipt_shows_placeholder(self, bills_view, context):
        controller = Bills(bills_view, context, make_store(UNSORTED))
        await controller.retrieve_and_render()
        # "older" has no receipt and is third once sorted
        icon = bills_view.query_all("icon-eye")[2]

        controller.handle_click_icon_eye(icon)

        body = bills_view.query("modaleFile-body")
        assert not any(isinstance(c, html.Img) for c in iter_components(body))
        assert "Aucun justificatif disponible" in bills_view.text()
        assert bills_view.shown_modals == ["modaleFile"]

    async def test_every_row_has_an_icon(self, bills_view, context):
        controller = Bills(bills_view, context, make_store(UNSORTED))
        await controller.retrieve_and_render()

        icons = bills_view.query_all("icon-eye")

        assert len(icons) == len(UNSORTED)
        assert getattr(icons[0], "data-bill-url") == "https://localhost:3456/images/a.jpg"
        assert getattr(icons[2], "data-bill-url") == ""


class TestBillsPage:
    """The page renderer takes exactly one state."""

    def test_loading(self):
        page = build_bills_page(loading=True)

        assert page.id == "loading"

    def test_error(self):
        page = build_bills_page(error="Erreur 404")

        assert page.children[1].children == "Erreur 404"

    def test_empty_data_renders_empty_table(self):
        page = build_bills_page(data=[])

        tbody = next(c for c in iter_components(page) if getattr(c, "id", None) == "tbody")
        assert tbody.children == []

    @pytest.mark.parametrize(
        "kwargs",
        [{}, {"data": [], "loading": True}, {"loading": True, "error": "x"}],
    )
    def test_rejects_ambiguous_state(self, kwargs):
        with pytest.raises(ValueError):
            build_bills_page(**kwargs)
