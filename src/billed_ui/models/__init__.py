"""
Data models and serialization helpers for the Billed UI.

This package provides:
- Bill domain model and API (de)serialization
- Session variants validated at the storage boundary
- Controller state models (render states, pending upload, submission status)
"""

from billed_ui.models.bill import (
    Bill,
    BillStatus,
    deserialize_bill,
    serialize_bill,
)
from billed_ui.models.common import (
    Data,
    Error,
    Loading,
    PendingUpload,
    RenderState,
    SubmissionStatus,
    UploadedFile,
)
from billed_ui.models.session import NoSession, Role, UserSession, parse_session

__all__ = [
    "Bill",
    "BillStatus",
    "Data",
    "Error",
    "Loading",
    "NoSession",
    "PendingUpload",
    "RenderState",
    "Role",
    "SubmissionStatus",
    "UploadedFile",
    "UserSession",
    "deserialize_bill",
    "parse_session",
    "serialize_bill",
]
