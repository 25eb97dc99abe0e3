"""
Static and demo data for the Billed UI.

This package contains fixture data used by DemoStore for development,
testing, and demonstrations without a running API.

Modules:
- demo_bills: Pre-populated Bill objects
"""
