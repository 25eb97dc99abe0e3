"""
Layout helpers for the Billed Dash application.

This module defines:
- The vertical layout wrapping employee and admin views (navigation icons,
  disconnect control, content area)
- The root Dash layout: URL tracking, the session persisted in the
  browser's localStorage, the pending upload store, the alert dialog and
  the container the router mounts views into
"""

from dash import dcc, html
from dash_iconify import DashIconify

CONTENT_ID = "content"
ACTIVE_ICON_CLASS = "active-icon"

# Navigation icons and the route name each one stands for
NAV_ICONS = {
    "icon-window": "Bills",
    "icon-mail": "NewBill",
}


def build_vertical_layout(content, show_nav_icons: bool = True) -> html.Div:
    """
    Wrap a page in the vertical navigation layout.

    Args:
        content: Page component displayed in the content area.
        show_nav_icons: Show the employee navigation icons.
    """
    nav_children = [html.Div("Billed", className="layout-title")]
    if show_nav_icons:
        nav_children.extend(
            [
                html.Div(
                    id="icon-window",
                    className="layout-icon",
                    children=DashIconify(icon="mdi:window-restore", width=26),
                ),
                html.Div(
                    id="icon-mail",
                    className="layout-icon",
                    children=DashIconify(icon="mdi:email-outline", width=26),
                ),
            ]
        )
    nav_children.append(
        html.Div(
            id="layout-disconnect",
            className="layout-disconnect",
            n_clicks=0,
            title="Se déconnecter",
            children=DashIconify(icon="mdi:logout", width=26),
        )
    )
    return html.Div(
        className="layout",
        children=[
            html.Div(
                id="vertical-navbar",
                className="vertical-navbar",
                children=nav_children,
            ),
            html.Div(id=CONTENT_ID, className="content", children=content),
        ],
    )


def build_layout() -> html.Div:
    """
    Build the root layout for the Billed application.

    Creates:
    - dcc.Location tracking the hash route
    - dcc.Store("session-store") persisted in localStorage holding the
      "user" and "jwt" entries
    - dcc.Store("pending-upload") carrying the selected receipt between
      callbacks
    - dcc.ConfirmDialog("alert") for blocking alerts
    - The root container views are mounted into

    Returns:
        Root html.Div containing the complete application layout.
    """
    return html.Div(
        className="app-shell",
        children=[
            dcc.Location(id="url", refresh=False),
            dcc.Store(id="session-store", storage_type="local"),
            dcc.Store(id="pending-upload", data=None),
            dcc.ConfirmDialog(id="alert", message=""),
            html.Div(id="root"),
        ],
    )
