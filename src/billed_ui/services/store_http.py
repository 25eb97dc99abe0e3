"""
HTTP implementation of the remote store for the Billed REST API.

Endpoints used:
- POST   /auth/login        -> {"jwt": ...}
- GET    /bills             -> [bill, ...]
- POST   /bills             (multipart: file, email) -> {"key", "fileUrl", ...}
- PATCH  /bills/{selector}  (JSON bill) -> bill

Authenticated requests carry "Authorization: Bearer <jwt>". Non-2xx
responses become ClientError/ServerError with an "Erreur <status>" message;
transport failures become NetworkFailure.

Optional Environment Variables:
    BILLED_API_URL: Base URL of the API (default http://localhost:5678)
    BILLED_API_TIMEOUT: Request timeout in seconds (default 10)
"""

import os
from typing import Any, Mapping

import httpx

from billed_ui.lib import logs, objects
from billed_ui.models.bill import Bill, deserialize_bill
from billed_ui.services.errors import NetworkFailure, failure_for_status
from billed_ui.services.store import BillsResource, Store

LOG = logs.logger(__file__)

_DEFAULT_BASE_URL = "http://localhost:5678"
_DEFAULT_TIMEOUT = 10.0


class HttpBillsResource(BillsResource):
    """Bills collection served by the REST API."""

    def __init__(self, store: "HttpStore") -> None:
        self._store = store

    async def list(self):
        """GET /bills."""
        payload = await self._store.request("GET", "/bills")
        return [deserialize_bill(item) for item in payload or []]

    async def create(self, payload: Mapping[str, Any]) -> dict:
        """POST /bills as multipart form data, letting httpx set the boundary."""
        upload = payload.get("file")
        files = None
        if upload is not None:
            files = {"file": (upload.name, upload.content, upload.content_type)}
        data = {"email": payload.get("email", "")}
        result = await self._store.request(
            "POST", "/bills", data=data, files=files, json_body=False
        )
        return dict(result or {})

    async def update(self, payload: Mapping[str, Any], selector: str | None) -> Bill:
        """PATCH /bills/{selector} with the serialized bill."""
        result = await self._store.request(
            "PATCH", f"/bills/{selector}", content=objects.to_json(dict(payload))
        )
        return deserialize_bill(result or payload)


class HttpStore(Store):
    """
    Remote store talking to the Billed REST API through httpx.

    Attributes:
        base_url: API root URL.
        timeout: Request timeout in seconds.
        token: JWT sent as bearer token, if any.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or os.getenv("BILLED_API_URL", _DEFAULT_BASE_URL)
        self.timeout = timeout or float(
            os.getenv("BILLED_API_TIMEOUT", str(_DEFAULT_TIMEOUT))
        )
        self.token = token
        self._transport = transport

    def bills(self) -> BillsResource:
        return HttpBillsResource(self)

    def with_token(self, token: str | None) -> "HttpStore":
        """Return a copy of this store authenticated with the given JWT."""
        return HttpStore(
            base_url=self.base_url,
            timeout=self.timeout,
            token=token,
            transport=self._transport,
        )

    async def login(self, email: str, password: str) -> str | None:
        """POST /auth/login and return the JWT."""
        result = await self.request(
            "POST",
            "/auth/login",
            content=objects.to_json({"email": email, "password": password}),
            authorized=False,
        )
        return (result or {}).get("jwt")

    async def request(
        self,
        method: str,
        url: str,
        *,
        authorized: bool = True,
        json_body: bool = True,
        **kwargs: Any,
    ) -> Any:
        """
        Send a request and decode the JSON response.

        Args:
            method: HTTP method.
            url: Path relative to base_url.
            authorized: Send the bearer token when one is set.
            json_body: Declare a JSON request body; disabled for multipart.
            **kwargs: Passed to httpx.AsyncClient.request.

        Raises:
            NetworkFailure: The API could not be reached.
            ClientError: 4xx response.
            ServerError: 5xx response.
        """
        headers = {}
        if authorized and self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        if json_body:
            headers["Content-Type"] = "application/json"

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(method, url, headers=headers, **kwargs)
        except httpx.TransportError as exc:
            LOG.error("%s %s failed: %s", method, url, exc)
            raise NetworkFailure(f"Erreur réseau : {exc}") from exc

        if response.is_error:
            detail = _error_detail(response)
            LOG.error("%s %s -> %s %s", method, url, response.status_code, detail)
            message = f"Erreur {response.status_code}"
            if detail:
                message = f"{message} : {detail}"
            raise failure_for_status(response.status_code, message)

        if not response.content:
            return None
        return response.json()


def _error_detail(response: httpx.Response) -> str:
    """Extract the API's error message, if any."""
    try:
        body = response.json()
    except ValueError:
        return ""
    if isinstance(body, dict):
        return str(body.get("message") or "")
    return ""
