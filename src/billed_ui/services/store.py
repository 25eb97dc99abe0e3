"""
Abstract base classes defining the remote store contract.

The controllers only depend on this contract:

    store.bills().list()                      -> list[Bill]
    store.bills().create(payload)             -> {"key", "fileUrl", ...}
    store.bills().update(payload, selector)   -> Bill

All operations are coroutines and raise StoreError subclasses on failure.

Implementations:
- DemoStore: In-memory bills for development/testing
- HttpStore: httpx client of the Billed REST API
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping

from billed_ui.models.bill import Bill


class BillsResource(ABC):
    """Operations on the bills collection."""

    @abstractmethod
    async def list(self) -> list[Bill]:
        """Return the bills visible to the current user."""

    @abstractmethod
    async def create(self, payload: Mapping[str, Any]) -> dict:
        """
        Register a new bill together with its receipt file.

        Args:
            payload: {"file": UploadedFile | None, "email": str}.

        Returns:
            Dictionary with the new bill "key" and the stored "fileUrl".
        """

    @abstractmethod
    async def update(self, payload: Mapping[str, Any], selector: str | None) -> Bill:
        """
        Replace the fields of an existing bill.

        Args:
            payload: Serialized bill (camelCase keys).
            selector: Identifier of the bill returned by create().
        """


class Store(ABC):
    """Entry point of a remote store; exposes resource accessors."""

    @abstractmethod
    def bills(self) -> BillsResource:
        """Return the bills resource."""

    def with_token(self, token: str | None) -> "Store":
        """
        Return a store that authenticates with the given JWT.

        Default implementation ignores the token and returns self.
        """
        return self

    async def login(self, email: str, password: str) -> str | None:
        """
        Exchange credentials for a JWT.

        Returns:
            The token, or None when the store does not use authentication.
            Default implementation returns None.
        """
        return None
