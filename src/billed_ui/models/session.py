"""
Session model for the Billed UI.

The logged-in user is stored as JSON under the "user" key. Anything that
is absent, not JSON, or carries an unknown role is turned into NoSession
at this boundary so controllers never handle raw storage values.
"""

import json
from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """Account types known to the application."""

    EMPLOYEE = "Employee"
    ADMIN = "Admin"


@dataclass(frozen=True, slots=True)
class UserSession:
    """An authenticated user."""

    role: Role
    email: str = ""

    @property
    def is_employee(self) -> bool:
        return self.role is Role.EMPLOYEE

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def to_dict(self) -> dict:
        """Serialize to the stored {"type", "email"} layout."""
        return {"type": self.role.value, "email": self.email}


@dataclass(frozen=True, slots=True)
class NoSession:
    """No usable user in storage."""

    reason: str = "missing"


def parse_session(raw: str | None) -> UserSession | NoSession:
    """
    Validate a stored user entry.

    Args:
        raw: JSON string stored under the "user" key, or None.

    Returns:
        UserSession for a well-formed entry, NoSession otherwise.
    """
    if not raw:
        return NoSession()
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        return NoSession("malformed")
    if not isinstance(data, dict):
        return NoSession("malformed")
    try:
        role = Role(data.get("type"))
    except ValueError:
        return NoSession("unknown role")
    email = data.get("email") or ""
    return UserSession(role=role, email=str(email))
