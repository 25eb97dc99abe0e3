"""
Demo implementation of the remote store using in-memory data.

This store is useful for:
- Local development without the Billed API
- Testing controllers with realistic data

Created bills are kept in memory for the lifetime of the store, so a bill
submitted from the new bill form shows up in the bills list afterwards.
"""

import uuid
from dataclasses import replace
from typing import Any, Mapping, Sequence

from billed_ui.data.demo_bills import DEMO_BILLS
from billed_ui.lib import logs
from billed_ui.models.bill import Bill, deserialize_bill
from billed_ui.services.errors import ClientError
from billed_ui.services.store import BillsResource, Store

LOG = logs.logger(__file__)

_FILE_URL_PREFIX = "https://localhost:3456/images/"


class DemoBillsResource(BillsResource):
    """In-memory bills collection shared by a DemoStore."""

    def __init__(self, bills: dict[str, Bill]) -> None:
        self._bills = bills

    async def list(self):
        """Return a copy of every stored bill, in insertion order."""
        return [replace(bill) for bill in self._bills.values()]

    async def create(self, payload: Mapping[str, Any]) -> dict:
        """
        Register a placeholder bill and pretend to store its receipt.

        The placeholder has no name or date until update() fills it in, and
        stays listed as is when update() never succeeds, as with the API.
        """
        key = uuid.uuid4().hex[:20]
        upload = payload.get("file")
        file_name = getattr(upload, "name", None)
        file_url = f"{_FILE_URL_PREFIX}{file_name}" if file_name else None
        self._bills[key] = Bill(
            id=key,
            type="",
            name="",
            amount=None,
            date="",
            file_url=file_url,
            file_name=file_name,
            email=payload.get("email", "") or "",
        )
        LOG.info("Demo bill created - key:%s file:%s", key, file_name)
        return {"key": key, "fileUrl": file_url, "fileName": file_name}

    async def update(self, payload: Mapping[str, Any], selector: str | None) -> Bill:
        """Replace the stored bill matching the selector."""
        if selector not in self._bills:
            raise ClientError(404)
        bill = replace(deserialize_bill(payload), id=selector)
        self._bills[selector] = bill
        LOG.info("Demo bill updated - key:%s", selector)
        return replace(bill)


class DemoStore(Store):
    """
    In-memory store backed by static demo bills.

    Args:
        bills: Custom bill list, or None to use DEMO_BILLS.
    """

    def __init__(self, bills: Sequence[Bill] | None = None) -> None:
        source = DEMO_BILLS if bills is None else bills
        self._bills: dict[str, Bill] = {}
        for bill in source:
            key = bill.id or uuid.uuid4().hex[:20]
            self._bills[key] = replace(bill, id=key)
        self._resource = DemoBillsResource(self._bills)

    def bills(self) -> BillsResource:
        return self._resource
