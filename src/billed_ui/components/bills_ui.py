"""
Bills page component.

Renders one of three states: the loading indicator, the error page, or the
table of bills with the "new bill" button and the receipt preview modal.
Every eye icon carries the receipt URL in its data-bill-url attribute; the
hidden bill-urls store repeats them in row order for the Dash callbacks.
"""

from typing import Sequence

from dash import dcc, html
from dash_iconify import DashIconify

from billed_ui.components.pages import build_error_page, build_loading_page
from billed_ui.models.bill import Bill

TITLE = "Mes notes de frais"
MODAL_ID = "modaleFile"
MODAL_BODY_ID = "modaleFile-body"

_COLUMNS = ("Type", "Nom", "Date", "Montant", "Statut", "Actions")


def build_bills_page(
    data: Sequence[Bill] | None = None,
    loading: bool = False,
    error: str | None = None,
) -> html.Div:
    """
    Return the bills page for exactly one of the three render states.

    Args:
        data: Bills in display order.
        loading: Show the loading indicator.
        error: Failure message to show.

    Raises:
        ValueError: Zero or several states were given.
    """
    given = sum((data is not None, bool(loading), error is not None))
    if given != 1:
        raise ValueError("Exactly one of data, loading or error must be given")
    if loading:
        return build_loading_page()
    if error is not None:
        return build_error_page(error)
    return html.Div(
        className="bills-page",
        children=[
            _build_header(),
            _build_table(data),
            dcc.Store(id="bill-urls", data=[bill.file_url for bill in data]),
            build_preview_modal(),
        ],
    )


def build_preview_modal() -> html.Div:
    """Return the hidden modal that displays a bill receipt."""
    return html.Div(
        id=MODAL_ID,
        className="modal fade",
        style={"display": "none"},
        children=[
            html.Div(
                className="modal-dialog",
                children=[
                    html.Div(
                        className="modal-content",
                        children=[
                            html.Div(
                                className="modal-header",
                                children=[
                                    html.H5("Justificatif", className="modal-title"),
                                    html.Button(
                                        "×",
                                        id="modal-close",
                                        className="close",
                                        n_clicks=0,
                                    ),
                                ],
                            ),
                            html.Div(id=MODAL_BODY_ID, className="modal-body"),
                        ],
                    )
                ],
            )
        ],
    )


def build_receipt_preview(url: str | None, width: int) -> html.Div:
    """Return the receipt image, or a placeholder when there is no receipt."""
    if not url or url == "null":
        return html.Div(
            className="bill-proof-container placeholder",
            children=[
                DashIconify(icon="mdi:file-hidden", width=48),
                html.P("Aucun justificatif disponible", className="muted"),
            ],
        )
    return html.Div(
        className="bill-proof-container",
        style={"textAlign": "center"},
        children=[html.Img(src=url, width=width, alt="Bill")],
    )


def _build_header() -> html.Div:
    return html.Div(
        className="content-header",
        children=[
            html.Div(TITLE, className="content-title"),
            html.Button(
                "Nouvelle note de frais",
                id="btn-new-bill",
                className="btn btn-primary",
                n_clicks=0,
            ),
        ],
    )


def _build_table(bills: Sequence[Bill]) -> html.Div:
    return html.Div(
        id="data-table",
        children=[
            html.Table(
                id="example",
                className="table table-striped",
                children=[
                    html.Thead(html.Tr([html.Th(label) for label in _COLUMNS])),
                    html.Tbody(
                        id="tbody",
                        children=[_build_row(bill, index) for index, bill in enumerate(bills)],
                    ),
                ],
            )
        ],
    )


def _build_row(bill: Bill, index: int) -> html.Tr:
    return html.Tr(
        [
            html.Td(bill.type),
            html.Td(bill.name),
            html.Td(bill.formatted_date()),
            html.Td(bill.formatted_amount()),
            html.Td(bill.formatted_status()),
            html.Td(build_eye_icon(bill.file_url, index)),
        ]
    )


def build_eye_icon(url: str | None, index: int) -> html.Span:
    """Return the eye icon opening the receipt preview of a row."""
    return html.Span(
        id={"type": "icon-eye", "index": index},
        className="icon-eye",
        n_clicks=0,
        children=DashIconify(icon="mdi:eye-outline", width=20),
        **{"data-bill-url": url or ""},
    )
