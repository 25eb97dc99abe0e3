"""
Store factory for the Billed UI.

This module provides the get_store() factory function that returns the
appropriate Store implementation based on configuration.

Available Implementations:
- demo: In-memory store seeded with demo bills (no API required)
- http: httpx client of the Billed REST API

The store is cached at the module level, so the same instance is reused
across all requests and bills created in demo mode stay visible. Configure
via BILLED_UI_STORE environment variable.
"""

import os
from functools import cache
from typing import Callable, Dict

from billed_ui.lib import logs
from billed_ui.services.errors import (
    ClientError,
    NetworkFailure,
    ServerError,
    StoreError,
)
from billed_ui.services.store import BillsResource, Store
from billed_ui.services.store_demo import DemoStore
from billed_ui.services.store_http import HttpStore

LOG = logs.logger(__file__)

_STORE_REGISTRY: Dict[str, Callable[[], Store]] = {
    "demo": lambda: DemoStore(),
    "http": lambda: HttpStore(),
}


@cache
def get_store(kind: str | None = None) -> Store:
    """Return the configured store implementation."""
    resolved_kind = (kind or os.getenv("BILLED_UI_STORE", "demo")).lower()
    LOG.info("get_store - kind:%s resolved_kind:%s", kind, resolved_kind)
    try:
        factory = _STORE_REGISTRY[resolved_kind]
    except KeyError as exc:
        msg = f"Unknown store kind: {resolved_kind}"
        raise ValueError(msg) from exc
    return factory()


__all__ = [
    "BillsResource",
    "ClientError",
    "DemoStore",
    "HttpStore",
    "NetworkFailure",
    "ServerError",
    "Store",
    "StoreError",
    "get_store",
]
