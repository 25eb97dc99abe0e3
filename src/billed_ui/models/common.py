"""
Common state models for the Billed UI controllers.

This module defines:

- Render states handed to the bills page renderer (Loading, Error, Data)
- The pending receipt upload kept by the new bill controller
- The submission status of the new bill form

PendingUpload includes to_dict/from_dict so the Dash adapter can carry it
between callbacks in a dcc.Store.
"""

import base64
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from billed_ui.models.bill import Bill


@dataclass(frozen=True)
class Loading:
    """Bills are being fetched."""

    def to_render_kwargs(self) -> dict:
        return {"loading": True}


@dataclass(frozen=True)
class Error:
    """Fetching or submitting failed; message is shown verbatim."""

    message: str

    def to_render_kwargs(self) -> dict:
        return {"error": self.message}


@dataclass(frozen=True)
class Data:
    """Bills ready to be displayed, already in display order."""

    bills: Sequence[Bill] = field(default_factory=tuple)

    def to_render_kwargs(self) -> dict:
        return {"data": list(self.bills)}


RenderState = Loading | Error | Data


class SubmissionStatus(str, Enum):
    """Lifecycle of the new bill form."""

    IDLE = "idle"
    FILE_SELECTED = "file_selected"
    SUBMITTING = "submitting"
    NAVIGATED = "navigated"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class UploadedFile:
    """A file picked in the receipt input."""

    name: str
    content: bytes = b""
    content_type: str = "application/octet-stream"


@dataclass(slots=True)
class PendingUpload:
    """
    Receipt selected for the bill being created.

    Attributes:
        file: The selected file.
        file_name: Name of the selected file.
        file_url: URL of the stored receipt, resolved by the store on submit.
        valid: True when the file passed the extension check.
    """

    file: UploadedFile
    file_name: str
    file_url: str | None = None
    valid: bool = True

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "name": self.file.name,
            "content": base64.b64encode(self.file.content).decode("ascii"),
            "content_type": self.file.content_type,
            "file_name": self.file_name,
            "file_url": self.file_url,
            "valid": self.valid,
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> "PendingUpload | None":
        """Deserialize from dictionary."""
        if not data:
            return None
        return cls(
            file=UploadedFile(
                name=data.get("name", ""),
                content=base64.b64decode(data.get("content") or b""),
                content_type=data.get("content_type", "application/octet-stream"),
            ),
            file_name=data.get("file_name", ""),
            file_url=data.get("file_url"),
            valid=data.get("valid", True),
        )
