"""Login page with the employee and administrator forms."""

from dash import dcc, html


def build_login_page() -> html.Div:
    """Return both login forms side by side."""
    return html.Div(
        className="login-page",
        children=[
            html.H1("Billed", className="login-title"),
            html.Div(
                className="login-forms",
                children=[
                    _build_form("employee", "Employé"),
                    _build_form("admin", "Administration"),
                ],
            ),
        ],
    )


def _build_form(prefix: str, title: str) -> html.Form:
    return html.Form(
        id=f"form-{prefix}",
        className="login-form",
        children=[
            html.H3(title),
            html.Label("Votre email", className="bold-label"),
            dcc.Input(id=f"{prefix}-email-input", type="email", placeholder="johndoe@email.com"),
            html.Label("Mot de passe", className="bold-label"),
            dcc.Input(id=f"{prefix}-password-input", type="password", placeholder="******"),
            html.Button(
                "Se connecter",
                id=f"{prefix}-login-button",
                type="button",
                className="btn btn-primary",
                n_clicks=0,
            ),
        ],
    )
