"""
Billed UI: a Dash front end for employee expense reports.

Employees list the bills they submitted, create new bills with a receipt
image, and log in and out. Administrators are routed to a placeholder
dashboard.

Subpackages:
- components: Dash UI components (pure builders)
- controllers: Bills list, new bill, login and logout controllers
- models: Bill, session and controller state models
- services: Remote store contract and implementations (demo, http)
- data: Static demo fixtures
- lib: Logging, serialization, paths and disk storage helpers

Main entry points:
- app.main(): Start the development server
- app.server: The Flask server (for WSGI deployment)
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
