"""
Failures raised by remote store implementations.

Every failure carries a human readable message that the bills page shows
as-is; the "Erreur <status>" wording is matched by the page text, so
subclasses keep it when no explicit message is given.
"""


class StoreError(Exception):
    """Base class for remote store failures."""

    status: int | None = None

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message())

    def default_message(self) -> str:
        return "Erreur"

    @property
    def message(self) -> str:
        return str(self)


class NetworkFailure(StoreError):
    """The store could not be reached at all."""

    def default_message(self) -> str:
        return "Erreur réseau"


class _StatusError(StoreError):
    """Failure reported by the store with an HTTP-like status."""

    def __init__(self, status: int, message: str | None = None) -> None:
        self.status = status
        super().__init__(message)

    def default_message(self) -> str:
        return f"Erreur {self.status}"


class ClientError(_StatusError):
    """4xx failure, e.g. an unknown bill (404) or an expired token (401)."""


class ServerError(_StatusError):
    """5xx failure."""


def failure_for_status(status: int, message: str | None = None) -> StoreError:
    """
    Build the failure matching an HTTP status.

    Args:
        status: Status code returned by the store (>= 400).
        message: Optional explicit message; defaults to "Erreur <status>".
    """
    if status >= 500:
        return ServerError(status, message)
    return ClientError(status, message)
