"""Loading and error pages shown in place of the bills table."""

from dash import html


def build_loading_page() -> html.Div:
    """Return the loading indicator."""
    return html.Div(
        id="loading",
        className="loading-page",
        children=[
            html.Div(className="spinner"),
            html.P("Loading...", className="muted"),
        ],
    )


def build_error_page(error: str | None) -> html.Div:
    """Return the error page carrying the failure message verbatim."""
    return html.Div(
        id="error-page",
        className="error-page",
        children=[
            html.H3("Erreur"),
            html.Div(
                str(error) if error else "",
                id="error-message",
                className="error-message",
            ),
        ],
    )
