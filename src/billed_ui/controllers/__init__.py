"""
Controllers turning view events and store responses into rendered states.

- bills: Bills list (fetch, order, render, preview)
- new_bill: New bill form (receipt validation, submission)
- login: Session opening
- logout: Session clearing
"""

from billed_ui.controllers.bills import Bills
from billed_ui.controllers.login import Login
from billed_ui.controllers.logout import Logout
from billed_ui.controllers.new_bill import NewBill

__all__ = ["Bills", "Login", "Logout", "NewBill"]
