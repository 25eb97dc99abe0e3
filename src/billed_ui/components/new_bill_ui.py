"""New bill form component."""

from dash import dcc, html

from billed_ui.components.pages import build_error_page

TITLE = "Envoyer une note de frais"
FORM_ERROR_ID = "form-error"

EXPENSE_TYPES = (
    "Transports",
    "Restaurants et bars",
    "Hôtel et logement",
    "Services en ligne",
    "IT et électronique",
    "Equipement et matériel",
    "Fournitures de bureau",
)


def build_new_bill_page() -> html.Div:
    """Return the new bill form with an empty error area."""
    return html.Div(
        className="new-bill-page",
        children=[
            html.Div(TITLE, className="content-title"),
            html.Form(
                id="form-new-bill",
                className="form-newbill-container",
                children=[
                    html.Div(
                        className="col-half",
                        children=[
                            _field(
                                "Type de dépense",
                                dcc.Dropdown(
                                    id="expense-type",
                                    options=list(EXPENSE_TYPES),
                                    value=EXPENSE_TYPES[0],
                                    clearable=False,
                                ),
                            ),
                            _field(
                                "Nom de la dépense",
                                dcc.Input(
                                    id="expense-name",
                                    type="text",
                                    placeholder="Vol Paris Londres",
                                ),
                            ),
                            _field("Date", dcc.Input(id="datepicker", type="date")),
                            _field(
                                "Montant TTC",
                                dcc.Input(id="amount", type="number", placeholder="348"),
                            ),
                            _field(
                                "TVA",
                                html.Div(
                                    className="flex-row",
                                    children=[
                                        dcc.Input(id="vat", type="number", placeholder="70"),
                                        dcc.Input(id="pct", type="number", placeholder="20"),
                                        html.Span("%"),
                                    ],
                                ),
                            ),
                        ],
                    ),
                    html.Div(
                        className="col-half",
                        children=[
                            _field("Commentaire", dcc.Textarea(id="commentary", rows=3)),
                            _field(
                                "Justificatif",
                                dcc.Upload(
                                    id="file",
                                    className="form-control blue-border",
                                    children=html.Div("Choisir un fichier"),
                                    multiple=False,
                                ),
                            ),
                        ],
                    ),
                    html.Div(id=FORM_ERROR_ID, className="form-error"),
                    html.Button(
                        "Envoyer",
                        id="btn-send-bill",
                        type="button",
                        className="btn btn-primary",
                        n_clicks=0,
                    ),
                ],
            ),
        ],
    )


def build_form_error(message: str) -> html.Div:
    """Return the submission error shown above the send button."""
    return build_error_page(message)


def _field(label: str, control) -> html.Div:
    return html.Div(
        className="form-group",
        children=[html.Label(label, className="bold-label"), control],
    )
