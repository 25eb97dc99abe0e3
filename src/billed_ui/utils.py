"""
Utility functions for bill data manipulation and formatting.

Provides helpers for:
- Date parsing (multiple formats supported)
- Date and status formatting for the bills table
- Ordering bills from most recent to oldest
- File extension extraction
"""

from datetime import date, datetime
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from billed_ui.models.bill import Bill

# First three letters of the French short month names, capitalised
_FRENCH_MONTHS = (
    "Jan",
    "Fév",
    "Mar",
    "Avr",
    "Mai",
    "Jui",
    "Jui",
    "Aoû",
    "Sep",
    "Oct",
    "Nov",
    "Déc",
)

_STATUS_LABELS = {
    "pending": "En attente",
    "accepted": "Accepté",
    "refused": "Refused",
}


def parse_date(date_str: str | None) -> date | None:
    """
    Parse a bill date into a calendar date.

    Args:
        date_str: Date string in ISO format (e.g., "2024-12-25") or m/d/y
            format (e.g., "12/25/2024", "12/25/24").

    Returns:
        date object if parsing succeeds, None otherwise
    """
    if not isinstance(date_str, str):
        return None
    date_str = date_str.strip()
    if not date_str:
        return None

    try:
        return date.fromisoformat(date_str)
    except ValueError:
        pass

    # Timestamps coming back from the API (e.g., "2024-12-25T00:00:00")
    try:
        return datetime.fromisoformat(date_str).date()
    except ValueError:
        pass

    for fmt in ("%m/%d/%Y", "%m/%d/%y"):
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue

    return None


def format_date(date_str: str | None) -> str:
    """
    Format a bill date for the bills table, e.g. "2004-04-04" -> "4 Avr. 04".

    Malformed dates are returned unchanged so the row still renders.
    """
    parsed = parse_date(date_str)
    if parsed is None:
        return date_str or ""
    month = _FRENCH_MONTHS[parsed.month - 1]
    return f"{parsed.day} {month}. {parsed.year % 100:02d}"


def format_status(status: str | None) -> str:
    """Return the French label for a bill status."""
    if not status:
        return ""
    return _STATUS_LABELS.get(status, status)


def sort_bills(bills: Sequence["Bill"]) -> list["Bill"]:
    """
    Order bills by date, most recent first.

    Bills sharing a date keep their original order. Bills whose date cannot
    be parsed are moved to the end, also in original order.

    Args:
        bills: Bills as returned by the store.

    Returns:
        New list in display order.
    """
    dated = []
    undated = []
    for bill in bills:
        parsed = parse_date(bill.date)
        if parsed is None:
            undated.append(bill)
        else:
            dated.append((parsed, bill))
    # list.sort stays stable with reverse=True
    dated.sort(key=lambda item: item[0], reverse=True)
    return [bill for _, bill in dated] + undated


def file_extension(file_name: str | None) -> str:
    """Return the lower-cased extension of a file name, without the dot."""
    if not file_name or "." not in file_name:
        return ""
    return file_name.rsplit(".", 1)[-1].lower()
