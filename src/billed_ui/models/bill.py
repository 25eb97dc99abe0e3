"""
Bill domain model and serialization helpers.

A bill is an expense submitted by an employee together with a receipt
image. The remote API exchanges bills as camelCase JSON; the helpers in
this module convert between that wire format and the Bill dataclass.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from billed_ui.utils import format_date, format_status


class BillStatus(str, Enum):
    """Review status of a bill."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REFUSED = "refused"


@dataclass(slots=True)
class Bill:
    """Primary dataclass for bills."""

    id: str | None
    type: str
    name: str
    amount: float | int | None
    date: str
    vat: float | int | str | None = ""
    pct: float | int | None = 20
    commentary: str = ""
    file_url: str | None = None
    file_name: str | None = None
    status: str = BillStatus.PENDING.value
    email: str = ""
    comment_admin: str = ""

    def formatted_date(self) -> str:
        """Return the bill date formatted for the bills table."""
        return format_date(self.date)

    def formatted_status(self) -> str:
        """Return the bill status label for the bills table."""
        return format_status(self.status)

    def formatted_amount(self) -> str:
        """Return the amount with the euro sign."""
        if self.amount is None or self.amount == "":
            return ""
        return f"{self.amount} €"


_WIRE_FIELDS = {
    "file_url": "fileUrl",
    "file_name": "fileName",
    "comment_admin": "commentAdmin",
}


def serialize_bill(bill: Bill, include_id: bool = True) -> dict:
    """Convert a Bill dataclass into the API's camelCase dictionary."""
    data = {
        _WIRE_FIELDS.get(name, name): getattr(bill, name)
        for name in Bill.__slots__
        if include_id or name != "id"
    }
    if isinstance(data.get("status"), BillStatus):
        data["status"] = data["status"].value
    return data


def deserialize_bill(payload: Mapping[str, Any]) -> Bill:
    """
    Convert an API dictionary back into a Bill dataclass.

    Missing keys fall back to the dataclass defaults; both camelCase and
    snake_case keys are understood.
    """

    def _get(name: str, default: Any = None) -> Any:
        wire = _WIRE_FIELDS.get(name)
        if wire and wire in payload:
            return payload[wire]
        return payload.get(name, default)

    return Bill(
        id=_get("id"),
        type=_get("type", ""),
        name=_get("name", ""),
        amount=_get("amount"),
        date=_get("date", ""),
        vat=_get("vat", ""),
        pct=_get("pct", 20),
        commentary=_get("commentary", "") or "",
        file_url=_get("file_url"),
        file_name=_get("file_name"),
        status=_get("status", BillStatus.PENDING.value),
        email=_get("email", "") or "",
        comment_admin=_get("comment_admin", "") or "",
    )
