"""
Reusable Dash UI components for the Billed application.

This package provides modular, composable components:
- bills_ui: Bills table, receipt preview modal, loading/error states
- new_bill_ui: New bill form
- login_ui: Employee and administrator login forms
- dashboard_ui: Administrator placeholder page
- pages: Loading and error pages

All components are pure functions that return Dash html/dcc elements,
making them easy to test and compose.
"""

from billed_ui.components.bills_ui import (
    build_bills_page,
    build_eye_icon,
    build_preview_modal,
    build_receipt_preview,
)
from billed_ui.components.dashboard_ui import build_dashboard_page
from billed_ui.components.login_ui import build_login_page
from billed_ui.components.new_bill_ui import build_form_error, build_new_bill_page
from billed_ui.components.pages import build_error_page, build_loading_page

__all__ = [
    "build_bills_page",
    "build_dashboard_page",
    "build_error_page",
    "build_eye_icon",
    "build_form_error",
    "build_loading_page",
    "build_login_page",
    "build_new_bill_page",
    "build_preview_modal",
    "build_receipt_preview",
]
