"""Placeholder page shown to administrators."""

from dash import html


def build_dashboard_page() -> html.Div:
    return html.Div(
        className="dashboard-page",
        children=[
            html.Div("Validations", className="content-title"),
            html.P("Espace administrateur", className="muted"),
        ],
    )
